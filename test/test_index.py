import unittest

import libschematic

from libschematic.index import blockIndex, inBounds, iterCells, growBuffer, getBounds, boundsFromBox

class TestBlockIndex( unittest.TestCase ):
    def test_formula( self ):
        #width=4, length=3
        self.assertEqual( blockIndex( 0, 0, 0, 4, 3 ), 0  )
        self.assertEqual( blockIndex( 1, 0, 0, 4, 3 ), 1  )
        self.assertEqual( blockIndex( 0, 0, 1, 4, 3 ), 4  )
        self.assertEqual( blockIndex( 0, 1, 0, 4, 3 ), 12 )
        self.assertEqual( blockIndex( 3, 1, 2, 4, 3 ), 23 )
    def test_injective( self ):
        for w, h, l in ( ( 1, 1, 1 ), ( 2, 1, 1 ), ( 3, 4, 5 ), ( 7, 2, 3 ) ):
            offsets = [ blockIndex( x, y, z, w, l ) for x in range( w ) for y in range( h ) for z in range( l ) ]
            self.assertEqual( sorted( offsets ), list( range( w * h * l ) ) )
    def test_inBounds( self ):
        self.assertTrue(  inBounds(  0,  0,  0, 2, 3, 4 ) )
        self.assertTrue(  inBounds(  1,  2,  3, 2, 3, 4 ) )
        self.assertFalse( inBounds( -1,  0,  0, 2, 3, 4 ) )
        self.assertFalse( inBounds(  0, -1,  0, 2, 3, 4 ) )
        self.assertFalse( inBounds(  0,  0, -1, 2, 3, 4 ) )
        self.assertFalse( inBounds(  2,  0,  0, 2, 3, 4 ) )
        self.assertFalse( inBounds(  0,  3,  0, 2, 3, 4 ) )
        self.assertFalse( inBounds(  0,  0,  4, 2, 3, 4 ) )
        self.assertFalse( inBounds(  0,  0,  0, 0, 0, 0 ) )

class TestIterCells( unittest.TestCase ):
    def test_order( self ):
        cells = list( iterCells( 2, 2, 2 ) )
        self.assertEqual( [ c[:3] for c in cells ], [
            ( 0, 0, 0 ), ( 0, 0, 1 ), ( 0, 1, 0 ), ( 0, 1, 1 ),
            ( 1, 0, 0 ), ( 1, 0, 1 ), ( 1, 1, 0 ), ( 1, 1, 1 )
        ] )
        for x, y, z, i in cells:
            self.assertEqual( i, blockIndex( x, y, z, 2, 2 ) )
    def test_empty( self ):
        self.assertEqual( list( iterCells( 0, 5, 5 ) ), [] )
    def test_restartable( self ):
        self.assertEqual( list( iterCells( 3, 2, 1 ) ), list( iterCells( 3, 2, 1 ) ) )

class TestGrowBuffer( unittest.TestCase ):
    def test_grow( self ):
        b = bytearray( b"\x07" )
        growBuffer( b, 3 )
        self.assertEqual( b, bytearray( b"\x07\x00\x00\x00" ) )
    def test_never_shrinks( self ):
        b = bytearray( b"\x01\x02\x03" )
        growBuffer( b, 0 )
        self.assertEqual( b, bytearray( b"\x01\x02\x03" ) )

class TestBounds( unittest.TestCase ):
    def test_getBounds( self ):
        minimum, size = getBounds( [ ( 5, 10, -2 ), ( 7, 10, 0 ), ( 6, 12, -1 ) ] )
        self.assertEqual( minimum, ( 5, 10, -2 ) )
        self.assertEqual( size, ( 3, 3, 3 ) )
    def test_single( self ):
        self.assertEqual( getBounds( [ ( -4, 0, 9 ) ] ), ( ( -4, 0, 9 ), ( 1, 1, 1 ) ) )
    def test_generator( self ):
        self.assertEqual( getBounds( ( i, 0, 0 ) for i in range( 4 ) ), ( ( 0, 0, 0 ), ( 4, 1, 1 ) ) )
    def test_empty( self ):
        with self.assertRaises( libschematic.EmptyBoundsInput ):
            getBounds( [] )
        #EmptyBoundsInput is a MalformedInput
        with self.assertRaises( libschematic.MalformedInput ):
            getBounds( iter( () ) )
    def test_boundsFromBox( self ):
        self.assertEqual( boundsFromBox( ( 1, 2, 3 ), ( 1, 4, 6 ) ), ( ( 1, 2, 3 ), ( 1, 3, 4 ) ) )
        with self.assertRaises( libschematic.MalformedInput ):
            boundsFromBox( ( 1, 2, 3 ), ( 0, 2, 3 ) )

if __name__ == "__main__":
    unittest.main()
