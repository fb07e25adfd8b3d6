import unittest

from libschematic.fixup import KEEP_META, FIXUPS_POCKET, FIXUPS_LEGACY, fixBlock

class TestFixupsPocket( unittest.TestCase ):
    def test_fences( self ):
        expected = { 188: 1, 189: 2, 190: 3, 191: 5, 192: 4 }
        for id, meta in expected.items():
            #The original metadata is discarded
            for original in ( 0, 7, 15 ):
                self.assertEqual( fixBlock( id, original ), ( 85, meta ) )
    def test_dark_oak_acacia_swap( self ):
        self.assertEqual( fixBlock( 191, 0, FIXUPS_POCKET ), ( 85, 5 ) )
        self.assertEqual( fixBlock( 192, 0, FIXUPS_POCKET ), ( 85, 4 ) )
    def test_keep_meta( self ):
        self.assertEqual( fixBlock( 95,  14 ), ( 241, 14 ) )
        self.assertEqual( fixBlock( 126, 3  ), ( 158, 3  ) )
        self.assertEqual( fixBlock( 125, 9  ), ( 157, 9  ) )
    def test_passthrough( self ):
        for id in ( 0, 1, 85, 160, 241, 255 ):
            self.assertEqual( fixBlock( id, 6 ), ( id, 6 ) )
    def test_table_shape( self ):
        for id, ( newID, newMeta ) in FIXUPS_POCKET.items():
            self.assertTrue( 0 <= newID <= 255 )
            self.assertTrue( newMeta is KEEP_META or 0 <= newMeta <= 15 )

class TestFixupsLegacy( unittest.TestCase ):
    def test_fences( self ):
        for id, meta in zip( range( 188, 193 ), range( 1, 6 ) ):
            self.assertEqual( fixBlock( id, 0, FIXUPS_LEGACY ), ( 85, meta ) )
    def test_glass( self ):
        self.assertEqual( fixBlock( 95,  4, FIXUPS_LEGACY ), ( 20,  0 ) )
        self.assertEqual( fixBlock( 160, 4, FIXUPS_LEGACY ), ( 102, 0 ) )
    def test_slabs( self ):
        self.assertEqual( fixBlock( 126, 2, FIXUPS_LEGACY ), ( 158, 0 ) )
        self.assertEqual( fixBlock( 125, 2, FIXUPS_LEGACY ), ( 157, 0 ) )

if __name__ == "__main__":
    unittest.main()
