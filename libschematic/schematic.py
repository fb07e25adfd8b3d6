#This module contains the Schematic document.
#
#A schematic file is a gzip-compressed NBT document whose root compound is named "Schematic" and contains:
#    Width, Height, Length: TAG_Short. Size of the region along the X, Y and Z axes.
#    Materials:             TAG_String. The dialect the block ids were written in: "Classic", "Alpha" or "Pocket".
#    Blocks:                TAG_Byte_Array. One legacy block id per cell.
#    Data:                  TAG_Byte_Array. One legacy metadata value per cell (only the low nibble is used).
#    Entities:              TAG_List. Entities within the region. Stored and written back as-is.
#    TileEntities:          TAG_List. Tile entities within the region. Stored and written back as-is.
#Blocks and Data are indexed with libschematic.index.blockIndex().

import logging
import zlib

from collections import namedtuple

from libschematic import tag
from libschematic.tag import NBTDocument, TAG_Compound, TAG_List, TAG_Byte_Array
from libschematic.shared import (
    TAG_SHORT, TAG_STRING, TAG_BYTE_ARRAY, TAG_NAMES,
    NBTFormatError, MalformedContainer, MalformedInput, DecodeFailed
)
from libschematic.index import blockIndex, inBounds, iterCells, growBuffer, getBounds, boundsFromBox
from libschematic.fixup import FIXUPS_POCKET, fixBlock

log = logging.getLogger( __name__ )

#Dialects
DIALECT_UNKNOWN = 0 #Fallback
DIALECT_CLASSIC = 1 #Exported from Minecraft Classic
DIALECT_ALPHA   = 2 #Exported from Minecraft Alpha and newer
DIALECT_POCKET  = 3 #Exported from Minecraft Pocket Edition

#Maps DIALECT_* enums to the names stored in the Materials tag
DIALECT_TO_NAME = (
    "Unknown",
    "Classic",
    "Alpha",
    "Pocket"
)
NAME_TO_DIALECT = { n: i for i, n in enumerate( DIALECT_TO_NAME ) }

#Schematic dimensions are stored in TAG_Shorts but treated as unsigned 16-bit values.
MAX_DIMENSION = 0xFFFF

PositionedBlock = namedtuple( "PositionedBlock", ( "x", "y", "z", "state" ) )
PositionedBlock.__doc__ = \
    """
    A block state at an integer position.
    state is an opaque handle owned by a BlockStateAuthority.
    """

#Returns the tag named name in root.
#Raises MalformedContainer if it's missing (and required) or isn't of the given tagType.
def _field( root, name, tagType, required=True ):
    t = root.get( name )
    if t is None:
        if required:
            raise MalformedContainer( name, "is missing" )
        return None
    if t.tagType != tagType:
        raise MalformedContainer( name, "is not a {}".format( TAG_NAMES[tagType] ) )
    return t

#Converts an unsigned dimension to the signed value stored in a TAG_Short.
def _toShort( value, name ):
    if value < 0 or value > MAX_DIMENSION:
        raise MalformedInput( "{} {:d} is outside of the range [0,{:d}].".format( name, value, MAX_DIMENSION ) )
    return value - 0x10000 if value > 0x7FFF else value

#Returns a TAG_Byte_Array copy of buffer, zero padded to at least size bytes.
def _padded( buffer, size ):
    b = TAG_Byte_Array( buffer )
    if len( b ) < size:
        b.extend( bytes( size - len( b ) ) )
    return b

class Schematic:
    """
    Represents a schematic: a width x height x length region of legacy blocks, plus opaque entity data.

    blocks and data are bytearrays of block ids and metadata values, indexed with libschematic.index.blockIndex().
    They are grown as needed and always have the same length; cells past their end read as id 0, meta 0.
    entities and tileEntities are tags (normally TAG_Lists) or None, and are never interpreted.

    A Schematic isn't safe to modify from several threads at once.
    """
    __slots__ = ( "width", "height", "length", "dialect", "blocks", "data", "entities", "tileEntities" )

    def __init__( self, width=0, height=0, length=0, dialect=DIALECT_UNKNOWN, blocks=None, data=None, entities=None, tileEntities=None ):
        self.width        = width        #Size along X
        self.height       = height       #Size along Y
        self.length       = length       #Size along Z
        self.dialect      = dialect      #DIALECT_* enum
        self.blocks       = bytearray( blocks or b"" )
        self.data         = bytearray( data or b"" )
        self.entities     = entities
        self.tileEntities = tileEntities

        #Keep the buffers the same length
        l = max( len( self.blocks ), len( self.data ) )
        if l > 0:
            growBuffer( self.blocks, l - 1 )
            growBuffer( self.data, l - 1 )

    def getVolume( self ):
        """Returns the number of cells in this schematic."""
        return self.width * self.height * self.length
    volume = property( getVolume )

    def getMaterials( self ):
        """Returns the name of this schematic's dialect, e.g. "Alpha"."""
        return DIALECT_TO_NAME[ self.dialect ]
    def setMaterials( self, materials ):
        """
        Sets this schematic's dialect by name.
        Raises ValueError if materials isn't one of "Unknown", "Classic", "Alpha", or "Pocket".
        """
        d = NAME_TO_DIALECT.get( materials )
        if d is None:
            raise ValueError( "Unknown materials \"{}\".".format( materials ) )
        self.dialect = d
    materials = property( getMaterials, setMaterials )

    def getBlock( self, x, y, z ):
        """
        Returns the legacy ( id, meta ) pair stored at (x, y, z).
        Raises IndexError if (x, y, z) is outside of the schematic.
        """
        if not inBounds( x, y, z, self.width, self.height, self.length ):
            raise IndexError( "({:d}, {:d}, {:d}) is outside of the schematic.".format( x, y, z ) )
        i = blockIndex( x, y, z, self.width, self.length )
        if i >= len( self.blocks ):
            return 0, 0
        return self.blocks[i], self.data[i] & 0x0F

    def setBlock( self, x, y, z, id, meta=0 ):
        """
        Stores the legacy block id:meta at (x, y, z).
        Raises IndexError if (x, y, z) is outside of the schematic.
        """
        if not inBounds( x, y, z, self.width, self.height, self.length ):
            raise IndexError( "({:d}, {:d}, {:d}) is outside of the schematic.".format( x, y, z ) )
        i = blockIndex( x, y, z, self.width, self.length )
        growBuffer( self.blocks, i )
        growBuffer( self.data, i )
        self.blocks[i] = id & 0xFF
        self.data[i]   = meta & 0x0F

    def setBlocks( self, blocks, table, bounds=None ):
        """
        Replaces the contents of this schematic with the given blocks.

        blocks is an iterable of PositionedBlocks (or anything with x, y, z, and state attributes).
        table is the LegacyMappingTable used to convert block states to legacy ids.
        bounds is an optional tuple ( minimum, maximum ) of inclusive ( x, y, z ) corners.
            If bounds is None, the schematic is sized to fit the blocks exactly, and an empty iterable raises EmptyBoundsInput.
            Otherwise the schematic is sized to bounds, and a block outside of it raises MalformedInput.

        Blocks are stored relative to the minimum corner. If several blocks share a position, the last one wins.
        The schematic is left unmodified if an exception is raised.
        """
        blocks = tuple( blocks )
        if bounds is None:
            minimum, size = getBounds( ( b.x, b.y, b.z ) for b in blocks )
        else:
            minimum, size = boundsFromBox( *bounds )
        minX, minY, minZ = minimum
        width, height, length = size

        ids  = bytearray()
        data = bytearray()
        for block in blocks:
            x, y, z = block.x - minX, block.y - minY, block.z - minZ
            if not inBounds( x, y, z, width, height, length ):
                raise MalformedInput( "Block at ({:d}, {:d}, {:d}) is outside of the bounding box.".format( block.x, block.y, block.z ) )
            i = blockIndex( x, y, z, width, length )
            growBuffer( ids, i )
            growBuffer( data, i )
            id, meta = table.toLegacy( block.state )
            ids[i]  = id & 0xFF
            data[i] = meta & 0x0F

        self.width, self.height, self.length = size
        self.blocks = ids
        self.data   = data

    def iterBlocks( self, table, fixups=FIXUPS_POCKET, origin=( 0, 0, 0 ) ):
        """
        Generator that iterates over every cell in this schematic, X outermost, then Y, then Z.
        For each cell, yields a PositionedBlock whose state is looked up with table (a LegacyMappingTable).

        fixups is the block id substitution table (see libschematic.fixup) applied to each cell unless this schematic's dialect is Pocket.
            Pass None to disable substitution.
        origin is the ( x, y, z ) position of the schematic's minimum corner. Defaults to ( 0, 0, 0 ).

        Each call returns a new, independent generator.
        """
        ox, oy, oz = origin
        blocks, data = self.blocks, self.data
        l = len( blocks )
        if self.dialect == DIALECT_POCKET:
            fixups = None

        states = {}
        for x, y, z, i in iterCells( self.width, self.height, self.length ):
            if i < l:
                legacy = ( blocks[i], data[i] & 0x0F )
            else:
                legacy = ( 0, 0 )
            if fixups is not None:
                legacy = fixBlock( legacy[0], legacy[1], fixups )

            state = states.get( legacy )
            if state is None:
                states[legacy] = state = table.fromLegacy( *legacy )
            yield PositionedBlock( ox + x, oy + y, oz + z, state )
    importBlocks = iterBlocks

    def toNBT( self ):
        """Returns this schematic as an NBTDocument."""
        volume = self.volume
        root = NBTDocument( "Schematic" )
        root.bytearray( "Blocks",    _padded( self.blocks, volume ) )
        root.bytearray( "Data",      _padded( self.data,   volume ) )
        root.short(     "Length",    _toShort( self.length, "Length" ) )
        root.short(     "Width",     _toShort( self.width,  "Width"  ) )
        root.short(     "Height",    _toShort( self.height, "Height" ) )
        root.string(    "Materials", self.materials )
        root["Entities"]     = TAG_List( listTagType=TAG_Compound ) if self.entities     is None else self.entities
        root["TileEntities"] = TAG_List( listTagType=TAG_Compound ) if self.tileEntities is None else self.tileEntities
        log.debug( "Encoded %dx%dx%d %s schematic", self.width, self.height, self.length, self.materials )
        return root

    @classmethod
    def fromNBT( cls, root ):
        """
        Returns a new Schematic built from root, the root TAG_Compound of a schematic file.
        Raises MalformedContainer if a required tag is missing or has the wrong type.
        """
        width  = _field( root, "Width",  TAG_SHORT ) & MAX_DIMENSION
        height = _field( root, "Height", TAG_SHORT ) & MAX_DIMENSION
        length = _field( root, "Length", TAG_SHORT ) & MAX_DIMENSION
        blocks = _field( root, "Blocks", TAG_BYTE_ARRAY )
        data   = _field( root, "Data",   TAG_BYTE_ARRAY )

        materials = _field( root, "Materials", TAG_STRING, False )
        if materials is None:
            dialect = DIALECT_UNKNOWN
        else:
            dialect = NAME_TO_DIALECT.get( materials )
            if dialect is None:
                log.warning( "Unrecognized schematic materials \"%s\"; treating as Unknown", materials )
                dialect = DIALECT_UNKNOWN

        log.debug( "Decoded %dx%dx%d %s schematic", width, height, length, DIALECT_TO_NAME[dialect] )
        return cls( width, height, length, dialect, blocks, data, root.get( "Entities" ), root.get( "TileEntities" ) )

    @classmethod
    def fromBytes( cls, data, compression="gzip" ):
        """
        Returns a new Schematic decoded from data, the contents of a schematic file.
        compression can be None, "gzip", or "zlib". Defaults to "gzip".
        Raises DecodeFailed if data can't be decompressed or parsed, and MalformedContainer if it isn't a schematic.
        """
        try:
            root = tag.fromBytes( data, compression )
        #Deeply nested lists or compounds exhaust the recursive readers
        except ( OSError, EOFError, zlib.error, NBTFormatError, UnicodeDecodeError, RecursionError ) as e:
            raise DecodeFailed( e ) from e
        return cls.fromNBT( root )

    def toBytes( self, compression="gzip" ):
        """Returns this schematic encoded as the contents of a schematic file."""
        return self.toNBT().toBytes( compression )

    def write( self, target, compression="gzip" ):
        """
        Writes this schematic to target.
        target can be the path of the file to write to (as a str), or a writable file-like object.
        compression can be None, "gzip", or "zlib". Defaults to "gzip".
        """
        self.toNBT().write( target, compression )

    def __repr__( self ):
        return "Schematic({:d}, {:d}, {:d}, '{}')".format( self.width, self.height, self.length, self.materials )

def exportBlocks( blocks, table, bounds=None, dialect=DIALECT_POCKET ):
    """
    Returns a new Schematic containing the given blocks.
    See help( Schematic.setBlocks ) for a description of blocks, table, and bounds.
    dialect is the DIALECT_* enum recorded in the schematic; defaults to DIALECT_POCKET.
    """
    schematic = Schematic( dialect=dialect )
    schematic.setBlocks( blocks, table, bounds )
    return schematic

def read( source, compression="gzip" ):
    """
    Reads a schematic from source and returns a Schematic.
    source can be the path of the file to read from (as a str), or a readable file-like object.
    compression can be None, "gzip", or "zlib". Defaults to "gzip".
    """
    if isinstance( source, str ):
        with open( source, "rb" ) as file:
            data = file.read()
    else:
        data = source.read()
    return Schematic.fromBytes( data, compression )
