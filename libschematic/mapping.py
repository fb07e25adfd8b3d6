"""
Translation between modern block states and legacy ( id, meta ) pairs.

Schematics predate named block states: every cell stores an 8-bit block id and a 4-bit metadata nibble.
The host application knows how to turn a legacy pair into a modern state (an "upgrade"), but not the reverse.
LegacyMappingTable builds the reverse direction once, by upgrading every known legacy pair, and caches lookups.
"""
import logging
import threading

from types import MappingProxyType

from libschematic.shared import StateSerializeError, StateDeserializeError, LegacyUpgradeError

log = logging.getLogger( __name__ )

#Number of distinct metadata values; meta is a 4-bit field.
META_COUNT = 16

#Returned by toLegacy() for states without a legacy equivalent.
LEGACY_AIR = ( 0, 0 )

def stateKey( name, properties ):
    """
    Returns a canonical str key for the block state with the given name and properties (a mapping of property names to values).
    Properties are sorted by name, so states that differ only in property declaration order have the same key.
    Values are rendered with repr() so that e.g. 1, "1" and True produce different keys.
    """
    return "{}[{}]".format( name, ",".join( "{}={!r}".format( k, properties[k] ) for k in sorted( properties ) ) )

class BlockStateAuthority:
    """
    The host application's block state registry, as seen by a LegacyMappingTable.

    Subclasses implement every method below. State handles are opaque to this library, but must be hashable.
    """
    def serializeState( self, state ):
        """
        Returns a tuple ( name, properties ) describing the given state, where properties maps property names to values.
        Raises StateSerializeError if the state can't be serialized.
        """
        raise NotImplementedError()

    def deserializeState( self, name, properties ):
        """
        Returns the state with the given name and properties.
        Raises StateDeserializeError if there is no such state.
        """
        raise NotImplementedError()

    def upgradeLegacy( self, id, meta ):
        """
        Returns a tuple ( name, properties ) describing the modern equivalent of the legacy block id:meta.
        Raises LegacyUpgradeError if the pair is unknown or invalid.
        """
        raise NotImplementedError()

    def iterLegacyIDs( self ):
        """Iterates over every legacy block id known to the authority."""
        raise NotImplementedError()

    def getUnknownState( self ):
        """Returns the placeholder state substituted for legacy blocks that can't be decoded."""
        raise NotImplementedError()

class DictAuthority( BlockStateAuthority ):
    """
    A BlockStateAuthority backed by a dictionary of legacy pairs.

    legacy maps ( id, meta ) tuples to ( name, properties ) tuples.
    unknown is the ( name, properties ) of the placeholder state.

    States are represented as ( name, frozenset( properties.items() ) ) tuples.
    Every state reachable by upgrading a legacy pair can be deserialized, as can the placeholder.
    """
    __slots__ = ( "_legacy", "_states", "_unknown" )

    def __init__( self, legacy, unknown=( "minecraft:info_update", {} ) ):
        self._legacy = { ( int( i ), int( m ) ): ( n, dict( p ) ) for ( i, m ), ( n, p ) in legacy.items() }
        self._unknown = self.makeState( *unknown )
        self._states = { self._unknown }
        for n, p in self._legacy.values():
            self._states.add( self.makeState( n, p ) )

    @staticmethod
    def makeState( name, properties=None ):
        """Returns the state handle for the given name and properties."""
        return ( name, frozenset( ( properties or {} ).items() ) )

    def serializeState( self, state ):
        if state not in self._states:
            raise StateSerializeError( state )
        name, properties = state
        return name, dict( properties )

    def deserializeState( self, name, properties ):
        state = self.makeState( name, properties )
        if state not in self._states:
            raise StateDeserializeError( name, properties )
        return state

    def upgradeLegacy( self, id, meta ):
        r = self._legacy.get( ( id, meta ) )
        if r is None:
            raise LegacyUpgradeError( id, meta )
        name, properties = r
        return name, dict( properties )

    def iterLegacyIDs( self ):
        return iter( sorted( { i for i, _ in self._legacy } ) )

    def getUnknownState( self ):
        return self._unknown

class LegacyMappingTable:
    """
    Bidirectional mapping between an authority's block states and legacy ( id, meta ) pairs.

    A table is meant to be shared: construct one per authority and pass it to every schematic operation that needs it.
    Lookups from states to legacy pairs are memoized for the lifetime of the table.
    The reverse index (canonical state key -> legacy pair) is built once, on first use, and never changes afterwards.

    Tables are safe to use from several threads. The reverse index is built exactly once and is only published
    once it is complete; concurrent callers either build it or wait for it.
    """
    __slots__ = ( "authority", "_forward", "_reverse", "_lock" )

    def __init__( self, authority ):
        self.authority = authority
        self._forward  = {}
        self._reverse  = None
        self._lock     = threading.Lock()

    def toLegacy( self, state ):
        """
        Returns the legacy ( id, meta ) pair for the given state.
        States without a legacy equivalent map to ( 0, 0 ) (air); this is not an error.
        """
        r = self._forward.get( state )
        if r is not None:
            return r

        reverse = self.ensureReverseIndexBuilt()
        try:
            name, properties = self.authority.serializeState( state )
        except StateSerializeError:
            r = LEGACY_AIR
        else:
            r = reverse.get( stateKey( name, properties ), LEGACY_AIR )

        with self._lock:
            return self._forward.setdefault( state, r )

    def fromLegacy( self, id, meta ):
        """
        Returns the authority's state for the legacy block id:meta.
        Pairs that can't be upgraded or deserialized produce the authority's unknown state.
        """
        authority = self.authority
        try:
            return authority.deserializeState( *authority.upgradeLegacy( id, meta ) )
        except ( LegacyUpgradeError, StateDeserializeError ):
            return authority.getUnknownState()

    def ensureReverseIndexBuilt( self ):
        """
        Builds the reverse index if it hasn't been built yet, and returns it (as a read-only mapping).

        Every legacy id known to the authority is tried with every meta value in [0,15], in ascending (id, meta) order.
        Pairs the authority can't upgrade are skipped.
        When several pairs upgrade to the same state, the first one enumerated is kept.
        """
        reverse = self._reverse
        if reverse is not None:
            return reverse

        with self._lock:
            #Another thread may have finished building while we were waiting for the lock
            reverse = self._reverse
            if reverse is not None:
                return reverse

            authority = self.authority
            index = {}
            ids = sorted( authority.iterLegacyIDs() )
            for id in ids:
                for meta in range( META_COUNT ):
                    try:
                        name, properties = authority.upgradeLegacy( id, meta )
                    except LegacyUpgradeError:
                        continue
                    index.setdefault( stateKey( name, properties ), ( id, meta ) )

            log.debug( "Built legacy reverse index: %d states from %d legacy ids", len( index ), len( ids ) )
            self._reverse = reverse = MappingProxyType( index )
            return reverse

    def getReverseIndex( self ):
        """Returns the reverse index (canonical state key -> ( id, meta )) as a read-only mapping, building it if necessary."""
        return self.ensureReverseIndexBuilt()

    def clearCache( self ):
        """Forgets memoized state -> legacy lookups. The reverse index is kept."""
        with self._lock:
            self._forward.clear()

    def __repr__( self ):
        return "LegacyMappingTable({!r})".format( self.authority )
