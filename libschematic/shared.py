import sys
import struct
from struct import Struct
from array import array

#Tag Types
#A TAG_End is a nameless tag that terminates TAG_Compound and is the default tagType for an empty TAG_List.
TAG_END        = 0
TAG_BYTE       = 1  #1-byte signed integer.
TAG_SHORT      = 2  #2-byte big-endian signed integer. Schematic dimensions are stored as these.
TAG_INT        = 3  #4-byte big-endian signed integer.
TAG_LONG       = 4  #8-byte big-endian signed integer.
TAG_FLOAT      = 5  #Big-endian binary32.
TAG_DOUBLE     = 6  #Big-endian binary64.
TAG_BYTE_ARRAY = 7  #4-byte signed length followed by that many bytes. Blocks and Data are stored as these.
TAG_STRING     = 8  #2-byte length (in bytes) followed by a UTF-8 encoded string.
TAG_LIST       = 9  #1-byte tagType, 4-byte signed length, then that many payloads of the given tagType.
TAG_COMPOUND   = 10 #Named tag header + payload pairs terminated by a TAG_End.
TAG_INT_ARRAY  = 11 #4-byte signed length followed by that many 4-byte big-endian signed integers.
TAG_LONG_ARRAY = 12 #4-byte signed length followed by that many 8-byte big-endian signed integers.

#Internal names of tags (indexed by tag type)
TAG_NAMES = (
    "TAG_End",
    "TAG_Byte",
    "TAG_Short",
    "TAG_Int",
    "TAG_Long",
    "TAG_Float",
    "TAG_Double",
    "TAG_Byte_Array",
    "TAG_String",
    "TAG_List",
    "TAG_Compound",
    "TAG_Int_Array",
    "TAG_Long_Array"
)

TAG_COUNT = len( TAG_NAMES )

#Compression types accepted by every read / write entry point
COMPRESSION_TYPES = ( None, "gzip", "zlib" )

#Structs
_NT = Struct( ">bh" )     #Named tag info
_TL = Struct( ">bi" )     #Tag list info
_B  = Struct( ">b"  )     #Signed byte (1 byte)
_S  = Struct( ">h"  )     #Signed big-endian short (2 bytes)
_I  = Struct( ">i"  )     #Signed big-endian int (4 bytes)
_L  = Struct( ">q"  )     #Signed big-endian long (8 bytes)
_F  = Struct( ">f"  )     #Big-endian float (4 bytes)
_D  = Struct( ">d"  )     #Big-endian double (8 bytes)

#array typecodes for 4 and 8-byte signed integers.
#array uses native sizes, so select a typecode that actually has the size we need.
if array( "i" ).itemsize == 4:
    SIGNED_INT_TYPE = "i"
elif array( "l" ).itemsize == 4:
    SIGNED_INT_TYPE = "l"
else:
    raise OSError( "No 4-byte datatype available." )
SIGNED_LONG_TYPE = "q"

_LITTLE_ENDIAN = sys.byteorder == "little"



class NBTFormatError( Exception ):
    """This exception is raised when parsing, writing, or modifying data that violates the NBT format."""
    pass

class WrongTagError( NBTFormatError ):
    """
    WrongTagError( expected, given )

    Raised when the root tag of an NBT document is not a TAG_Compound, or when a tag of the wrong type is added to a TAG_List.
    """
    def __str__( self ):
        return "Expected {}, but received {} instead.".format( describeTag( self.args[0] ), describeTag( self.args[1] ) )

class DuplicateNameError( NBTFormatError ):
    """
    DuplicateNameError( name )

    Raised when multiple tags with the same name are parsed from the same TAG_Compound.
    """
    def __str__( self ):
        return "There is already a tag with the name \"{}\" in this TAG_Compound.".format( self.args[0] )

class UnknownTagTypeError( NBTFormatError ):
    """
    UnknownTagTypeError( tagType )

    Raised when a tag with an invalid or unrecognized type is parsed or written.
    """
    def __str__( self ):
        return "Unknown or unsupported tag type: {:d}".format( self.args[0] )

class OutOfBoundsError( NBTFormatError ):
    """
    OutOfBoundsError( value, min, max )

    Raised when parsing or writing a value that is outside of the valid range for that type,
    or a string / sequence whose length is negative or too long to be represented.
    """
    def __str__( self ):
        return "Value {:d} is outside of expected range [{:d},{:d}].".format( *self.args )



class SchematicError( Exception ):
    """Base class for errors raised while decoding, encoding or building a schematic."""
    pass

class MalformedContainer( SchematicError ):
    """
    MalformedContainer( field, reason )

    Raised when the root compound of a schematic is missing a required field or the field has the wrong tag type.
    Decoding is aborted; no partial schematic is produced.
    """
    def __str__( self ):
        return "Malformed schematic container: field \"{}\" {}.".format( *self.args )

class MalformedInput( SchematicError ):
    """
    MalformedInput( message )

    Raised when blocks handed to a schematic can't be stored in one (e.g. outside of the given bounding box).
    """
    def __str__( self ):
        return str( self.args[0] )

class EmptyBoundsInput( MalformedInput ):
    """
    EmptyBoundsInput()

    Raised when the bounds of an empty collection of blocks are requested.
    """
    def __str__( self ):
        return "Cannot compute the bounds of an empty collection of blocks."

class DecodeFailed( SchematicError ):
    """
    DecodeFailed( reason )

    Raised when the compressed container can't be decompressed or parsed as NBT.
    The underlying exception is chained as __cause__.
    """
    def __str__( self ):
        return "Failed to decode schematic: {}".format( self.args[0] )



class BlockStateError( Exception ):
    """Base class for errors raised by a BlockStateAuthority."""
    pass

class StateSerializeError( BlockStateError ):
    """
    StateSerializeError( state )

    Raised when a block state has no serialized (name + properties) form.
    """
    def __str__( self ):
        return "Block state {!r} cannot be serialized.".format( self.args[0] )

class StateDeserializeError( BlockStateError ):
    """
    StateDeserializeError( name, properties )

    Raised when a name + properties pair doesn't describe a known block state.
    """
    def __str__( self ):
        return "Unknown block state {}{!r}.".format( *self.args )

class LegacyUpgradeError( BlockStateError ):
    """
    LegacyUpgradeError( id, meta )

    Raised when a legacy id / meta pair can't be upgraded to a block state.
    """
    def __str__( self ):
        return "No block state for legacy block {:d}:{:d}.".format( *self.args )



def describeTag( tagType ):
    """
    Returns a short description of a tag with the given tagType, including the internal name and numeric type (e.g. TAG_Compound (10) ).
    If tagType does not represent a valid tag, returns "Unknown (<tagType>)".
    """
    if tagType <= 0 or tagType >= TAG_COUNT:
        return "Unknown ({:d})".format( tagType )
    return "{} ({:d})".format( TAG_NAMES[tagType], tagType )

#_avtt
def assertValidTagType( tagType ):
    """Raises UnknownTagTypeError if the given tagType is unrecognized"""
    if tagType < 0 or tagType >= TAG_COUNT:
        raise UnknownTagTypeError( tagType )

#_r
def read( i, n ):
    """
    Reads n bytes from i (a readable file-like object).
    Raises an EOFError if the end-of-file is encountered before n bytes can be read.
    """
    b = i.read( n )
    if len( b ) != n:
        raise EOFError( "End of file reached prematurely!" )
    return b

#_retn
def readExpectedTagName( i, expected ):
    """
    Reads a named tag header and asserts that the tagType we read matches the given tagType, expected.
    Returns the name of the tag.
    """
    tagType, length = _NT.unpack( read( i, 3 ) )
    if tagType != expected:
        raise WrongTagError( expected, tagType )
    if length < 0:
        raise OutOfBoundsError( length, 0, 32767 )
    return read( i, length ).decode()

#_wtn
def writeTagName( tagType, name, o ):
    """Writes a named tag header."""
    b = name.encode()
    try:
        o.write( _NT.pack( tagType, len( b ) ) )
    except struct.error as e:
        raise OutOfBoundsError( len( b ), 0, 32767 ) from e
    o.write( b )

def readByte( i ):
    return _B.unpack( read( i, 1 ) )[0]
def writeByte( v, o ):
    o.write( _B.pack( v ) )

def readShort( i ):
    return _S.unpack( read( i, 2 ) )[0]
def writeShort( v, o ):
    o.write( _S.pack( v ) )

def readInt( i ):
    return _I.unpack( read( i, 4 ) )[0]
def writeInt( v, o ):
    o.write( _I.pack( v ) )

def readLong( i ):
    return _L.unpack( read( i, 8 ) )[0]
def writeLong( v, o ):
    o.write( _L.pack( v ) )

def readFloat( i ):
    return _F.unpack( read( i, 4 ) )[0]
def writeFloat( v, o ):
    o.write( _F.pack( v ) )

def readDouble( i ):
    return _D.unpack( read( i, 8 ) )[0]
def writeDouble( v, o ):
    o.write( _D.pack( v ) )

#_rst
def readString( i ):
    """Reads a TAG_String payload."""
    l = _S.unpack( read( i, 2 ) )[0]
    if l < 0:
        raise OutOfBoundsError( l, 0, 32767 )
    return read( i, l ).decode()

#_wst
def writeString( v, o ):
    """Writes a TAG_String payload."""
    v = v.encode()
    length = len( v )
    try:
        o.write( _S.pack( length ) )
    except struct.error as e:
        raise OutOfBoundsError( length, 0, 32767 ) from e
    o.write( v )

#_rah
def readArrayHeader( i ):
    """
    Reads a TAG_Byte_Array, TAG_Int_Array or TAG_Long_Array header.
    Returns the length (in elements) of the array.
    If the length is negative, raises an OutOfBoundsError.
    """
    l = _I.unpack( read( i, 4 ) )[0]
    if l < 0:
        raise OutOfBoundsError( l, 0, 2147483647 )
    return l

#_rlh
def readTagListHeader( i ):
    """
    Reads a TAG_List header.
    Returns a tuple ( tagType, length ).
    """
    t, l = _TL.unpack( read( i, 5 ) )
    assertValidTagType( t )
    if l < 0:
        raise OutOfBoundsError( l, 0, 2147483647 )
    return t, l

#_wlh
def writeTagListHeader( t, l, o ):
    o.write( _TL.pack( t, l ) )

#_wba
def writeByteArray( v, o ):
    """Writes a TAG_Byte_Array payload."""
    o.write( _I.pack( len( v ) ) )
    o.write( v )

def readNumbers( i, typecode, n ):
    """
    Reads n big-endian integers of the given array typecode from i into an array and returns it.
    array assumes native-endianness, so on little-endian systems the array is byteswapped after reading.
    """
    a = array( typecode )
    a.frombytes( read( i, n * a.itemsize ) )
    if _LITTLE_ENDIAN:
        a.byteswap()
    return a

def writeNumbers( a, o ):
    """
    Writes the length of a followed by its values, big-endian, to o.
    a is left unmodified; on little-endian systems a byteswapped copy is written instead.
    """
    o.write( _I.pack( len( a ) ) )
    if _LITTLE_ENDIAN:
        a = array( a.typecode, a )
        a.byteswap()
    o.write( a.tobytes() )
