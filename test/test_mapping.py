import threading
import unittest

import libschematic

from helpers import LEGACY, AIR, STONE, GRANITE, OAK, SPRUCE, UNKNOWN, COPPER, state, makeTable

#Counts how often the reverse index build enumerates legacy ids.
class CountingAuthority( libschematic.DictAuthority ):
    def __init__( self, legacy ):
        super().__init__( legacy )
        self.builds = 0
        self.serializations = 0
    def iterLegacyIDs( self ):
        self.builds += 1
        return super().iterLegacyIDs()
    def serializeState( self, state ):
        self.serializations += 1
        return super().serializeState( state )

class TestStateKey( unittest.TestCase ):
    def test_sorted( self ):
        a = libschematic.stateKey( "minecraft:log", { "pillar_axis": "x", "old_log_type": "oak" } )
        b = libschematic.stateKey( "minecraft:log", { "old_log_type": "oak", "pillar_axis": "x" } )
        self.assertEqual( a, b )
    def test_distinct( self ):
        keys = {
            libschematic.stateKey( "minecraft:stone", {} ),
            libschematic.stateKey( "minecraft:stone", { "stone_type": "granite" } ),
            libschematic.stateKey( "minecraft:stone", { "stone_type": "diorite" } ),
            libschematic.stateKey( "minecraft:wool",  { "stone_type": "granite" } ),
            libschematic.stateKey( "minecraft:x",     { "v": 1 } ),
            libschematic.stateKey( "minecraft:x",     { "v": "1" } ),
        }
        self.assertEqual( len( keys ), 6 )

class TestLegacyMappingTable( unittest.TestCase ):
    def test_toLegacy( self ):
        table = makeTable()
        self.assertEqual( table.toLegacy( AIR ),     ( 0, 0 ) )
        self.assertEqual( table.toLegacy( STONE ),   ( 1, 0 ) )
        self.assertEqual( table.toLegacy( GRANITE ), ( 1, 1 ) )
        self.assertEqual( table.toLegacy( SPRUCE ),  ( 5, 1 ) )
        self.assertEqual( table.toLegacy( state( "minecraft:log", pillar_axis="x", old_log_type="oak" ) ), ( 17, 4 ) )
    def test_first_writer_wins( self ):
        #5:0 and 5:8 both upgrade to oak planks; 5:0 is enumerated first
        table = makeTable()
        key = libschematic.stateKey( "minecraft:planks", { "wood_type": "oak" } )
        self.assertEqual( table.getReverseIndex()[key], ( 5, 0 ) )
        self.assertEqual( table.toLegacy( OAK ), ( 5, 0 ) )
    def test_first_writer_wins_ignores_declaration_order( self ):
        legacy = {
            ( 9, 3 ): ( "minecraft:thing", { "a": 1 } ),
            ( 2, 7 ): ( "minecraft:thing", { "a": 1 } ),
            ( 2, 9 ): ( "minecraft:thing", { "a": 1 } ),
        }
        table = makeTable( legacy )
        self.assertEqual( table.toLegacy( state( "minecraft:thing", a=1 ) ), ( 2, 7 ) )
    def test_unserializable_state( self ):
        authority = CountingAuthority( LEGACY )
        table = libschematic.LegacyMappingTable( authority )
        self.assertEqual( table.toLegacy( COPPER ), ( 0, 0 ) )
        #The fallback is cached like any other result
        self.assertEqual( table.toLegacy( COPPER ), ( 0, 0 ) )
        self.assertEqual( authority.serializations, 1 )
    def test_no_legacy_equivalent( self ):
        #The unknown state serializes, but no legacy pair upgrades to it
        self.assertEqual( makeTable().toLegacy( UNKNOWN ), ( 0, 0 ) )
    def test_forward_cache( self ):
        authority = CountingAuthority( LEGACY )
        table = libschematic.LegacyMappingTable( authority )
        for _ in range( 5 ):
            self.assertEqual( table.toLegacy( GRANITE ), ( 1, 1 ) )
        self.assertEqual( authority.serializations, 1 )
        table.clearCache()
        table.toLegacy( GRANITE )
        self.assertEqual( authority.serializations, 2 )
        #Clearing the cache doesn't rebuild the reverse index
        self.assertEqual( authority.builds, 1 )
    def test_build_idempotent( self ):
        authority = CountingAuthority( LEGACY )
        table = libschematic.LegacyMappingTable( authority )
        first = dict( table.ensureReverseIndexBuilt() )
        second = dict( table.ensureReverseIndexBuilt() )
        self.assertEqual( first, second )
        self.assertEqual( authority.builds, 1 )
    def test_build_skips_unknown_pairs( self ):
        index = makeTable().getReverseIndex()
        #Every distinct upgraded state, and nothing else
        self.assertEqual( len( index ), len( { libschematic.stateKey( n, p ) for n, p in LEGACY.values() } ) )
        self.assertNotIn( ( 1, 2 ), set( index.values() ) )
    def test_reverse_index_read_only( self ):
        index = makeTable().getReverseIndex()
        with self.assertRaises( TypeError ):
            index["minecraft:bogus[]"] = ( 1, 1 )
    def test_lazy_build( self ):
        authority = CountingAuthority( LEGACY )
        table = libschematic.LegacyMappingTable( authority )
        self.assertEqual( authority.builds, 0 )
        table.toLegacy( STONE )
        self.assertEqual( authority.builds, 1 )
    def test_concurrent_build( self ):
        authority = CountingAuthority( LEGACY )
        table = libschematic.LegacyMappingTable( authority )
        barrier = threading.Barrier( 8 )
        results = []
        def worker():
            barrier.wait()
            results.append( table.toLegacy( GRANITE ) )
        threads = [ threading.Thread( target=worker ) for _ in range( 8 ) ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual( results, [ ( 1, 1 ) ] * 8 )
        self.assertEqual( authority.builds, 1 )
    def test_fromLegacy( self ):
        table = makeTable()
        self.assertEqual( table.fromLegacy( 1, 1 ), GRANITE )
        self.assertEqual( table.fromLegacy( 5, 8 ), OAK )
        self.assertEqual( table.fromLegacy( 0, 0 ), AIR )
    def test_fromLegacy_unknown( self ):
        table = makeTable()
        self.assertEqual( table.fromLegacy( 1, 15 ), UNKNOWN )
        self.assertEqual( table.fromLegacy( 255, 0 ), UNKNOWN )
    def test_fromLegacy_undeserializable( self ):
        class StrictAuthority( libschematic.DictAuthority ):
            def deserializeState( self, name, properties ):
                if name == "minecraft:stone":
                    raise libschematic.StateDeserializeError( name, properties )
                return super().deserializeState( name, properties )
        table = libschematic.LegacyMappingTable( StrictAuthority( LEGACY ) )
        self.assertEqual( table.fromLegacy( 1, 0 ), UNKNOWN )
        self.assertEqual( table.fromLegacy( 5, 1 ), SPRUCE )

class TestDictAuthority( unittest.TestCase ):
    def test_errors( self ):
        authority = libschematic.DictAuthority( LEGACY )
        with self.assertRaises( libschematic.LegacyUpgradeError ):
            authority.upgradeLegacy( 1, 9 )
        with self.assertRaises( libschematic.StateSerializeError ):
            authority.serializeState( COPPER )
        with self.assertRaises( libschematic.StateDeserializeError ):
            authority.deserializeState( "minecraft:copper_block", {} )
    def test_iterLegacyIDs( self ):
        self.assertEqual( list( libschematic.DictAuthority( LEGACY ).iterLegacyIDs() ), [ 0, 1, 5, 17, 20, 85, 102, 158, 241 ] )

if __name__ == "__main__":
    unittest.main()
