"""
libschematic's tag module is a small DOM-style NBT codec.

Schematic containers are a single named TAG_Compound, usually gzip compressed.
read() and fromBytes() parse one into an NBTDocument; NBTDocument.write() and NBTDocument.toBytes() do the reverse.
Entity lists are stored as whatever tags they were read as, so unknown payloads survive a read / write cycle untouched.
"""
import gzip
import zlib

from collections import OrderedDict
from array import array
from io import BytesIO

from libschematic.shared import (
    WrongTagError, DuplicateNameError, OutOfBoundsError,
    TAG_END, TAG_BYTE, TAG_SHORT, TAG_INT, TAG_LONG, TAG_FLOAT, TAG_DOUBLE, TAG_BYTE_ARRAY, TAG_STRING, TAG_LIST, TAG_COMPOUND, TAG_INT_ARRAY, TAG_LONG_ARRAY,
    SIGNED_INT_TYPE, SIGNED_LONG_TYPE, COMPRESSION_TYPES,

    writeTagName        as _wtn,  writeByte         as _wb,   writeShort          as _ws,
    writeInt            as _wi,   writeLong         as _wl,   writeFloat          as _wf,
    writeDouble         as _wd,   writeString       as _wst,  writeTagListHeader  as _wlh,
    writeByteArray      as _wba,  writeNumbers      as _wn,

    readByte            as _rb,   readShort         as _rs,   readInt             as _ri,
    readLong            as _rl,   readFloat         as _rf,   readDouble          as _rd,
    readString          as _rst,  readTagListHeader as _rlh,  readArrayHeader     as _rah,
    readNumbers         as _rn,   read              as _r,    readExpectedTagName as _retn,

    assertValidTagType  as _avtt
)

_array_new      = array.__new__
_list_append    = list.append
_od_setitem     = OrderedDict.__setitem__

#Returns a method that creates tags of the given class and adds or replaces a tag in a TAG_Compound with the given name.
def _makeTagSetter( methodname, tagclass ):
    def setter( self, name, *args, **kwargs ):
        if not isinstance( name, str ):
            raise TypeError( "Attempted to set a non-str key on TAG_Compound." )
        t = tagclass( *args, **kwargs )
        _od_setitem( self, name, t )
        return t
    setter.__name__ = methodname
    setter.__doc__ = \
        """
        {0:}(self, name, *args, **kwargs) -> {1:}

        Creates a new {1:}, passing the given arguments to the tag's constructor.
        Sets self[name] to the new tag, then returns the new tag.
        """.format( methodname, tagclass.__name__ )
    return setter

#Returns an NBT class that stores a primitive like byte, short, int, or long.
def _makeIntPrimitiveClass( classname, tt, vmin, vmax, r, w ):
    class _IntPrimitiveTag( _BaseIntTag ):
        def __init__( self, value=0 ):
            #Note: self is set by int's __new__ prior to calling __init__.
            if self < vmin or self > vmax:
                raise OutOfBoundsError( self, vmin, vmax )
        tagType = tt
        min = vmin
        max = vmax
        _w  = w
    def _r( i ):
        return _IntPrimitiveTag( r( i ) )
    _IntPrimitiveTag._r = _r

    _IntPrimitiveTag.__name__ = classname
    _IntPrimitiveTag.__qualname__ = classname
    _IntPrimitiveTag.__doc__ = \
        """
        Represents a {0:}.
        {0:} is an int subclass and works the same way and in the same places as an int would.
        """.format( classname )
    return _IntPrimitiveTag

class _BaseTag:
    """Base class for all tag classes."""
    tagType = -1

    __slots__ = ()

    def _w( self, o ):
        """Write this tag's payload to the given writable file-like object, o."""
        raise NotImplementedError()
    def _r( i ):
        """Read this tag's payload from the given readable file-like object, i."""
        raise NotImplementedError()

class _BaseIntTag( int, _BaseTag ):
    """
    Base class for all primitive integer tags (TAG_Byte, TAG_Short, TAG_Int, TAG_Long).
    min and max are the (inclusive) bounds of the range of values the primitive can represent.
    """
    __slots__ = ()

    min =  1
    max = -1

    def __repr__( self ):
        return "{}({:d})".format( self.__class__.__name__, self )

TAG_Byte  = _makeIntPrimitiveClass( "TAG_Byte",  TAG_BYTE,                  -128,                 127, _rb, _wb )
TAG_Short = _makeIntPrimitiveClass( "TAG_Short", TAG_SHORT,               -32768,               32767, _rs, _ws )
TAG_Int   = _makeIntPrimitiveClass( "TAG_Int",   TAG_INT,            -2147483648,          2147483647, _ri, _wi )
TAG_Long  = _makeIntPrimitiveClass( "TAG_Long",  TAG_LONG,  -9223372036854775808, 9223372036854775807, _rl, _wl )

class TAG_Float( float, _BaseTag ):
    """Represents a TAG_Float."""
    tagType = TAG_FLOAT
    __slots__ = ()
    def __repr__( self ):
        return "TAG_Float({!r})".format( float( self ) )
    def _r( i ):
        return TAG_Float( _rf( i ) )
    _w = _wf

class TAG_Double( float, _BaseTag ):
    """Represents a TAG_Double."""
    tagType = TAG_DOUBLE
    __slots__ = ()
    def __repr__( self ):
        return "TAG_Double({!r})".format( float( self ) )
    def _r( i ):
        return TAG_Double( _rd( i ) )
    _w = _wd

class TAG_Byte_Array( bytearray, _BaseTag ):
    """
    Represents a TAG_Byte_Array.
    TAG_Byte_Array is a bytearray subclass; values are unsigned bytes in the range [0,255].
    Schematics store block ids (Blocks) and metadata nibbles (Data) as these.
    """
    tagType = TAG_BYTE_ARRAY
    __slots__ = ()
    def __repr__( self ):
        return "TAG_Byte_Array({:d} bytes)".format( len( self ) )
    def _r( i ):
        l = _rah( i )
        return TAG_Byte_Array( _r( i, l ) )
    _w = _wba

class TAG_String( str, _BaseTag ):
    """
    Represents a TAG_String.
    A TAG_String can be no longer than 32767 bytes when UTF-8 encoded.
    """
    tagType = TAG_STRING
    __slots__ = ()
    def __init__( self, *args, **kwargs ):
        l = len( self.encode() )
        if l > 32767:
            raise OutOfBoundsError( l, 0, 32767 )
    def __repr__( self ):
        return "TAG_String({})".format( str.__repr__( self ) )
    def _r( i ):
        return TAG_String( _rst( i ) )
    _w = _wst

class TAG_Int_Array( array, _BaseTag ):
    """Represents a TAG_Int_Array, an array of signed 4-byte integers."""
    tagType = TAG_INT_ARRAY
    __slots__ = ()
    #array implements __new__ rather than __init__
    def __new__( cls, values=() ):
        return _array_new( cls, SIGNED_INT_TYPE, values )
    def __repr__( self ):
        return "TAG_Int_Array({!r})".format( self.tolist() )
    def _r( i ):
        return TAG_Int_Array( _rn( i, SIGNED_INT_TYPE, _rah( i ) ) )
    _w = _wn

class TAG_Long_Array( array, _BaseTag ):
    """Represents a TAG_Long_Array, an array of signed 8-byte integers."""
    tagType = TAG_LONG_ARRAY
    __slots__ = ()
    def __new__( cls, values=() ):
        return _array_new( cls, SIGNED_LONG_TYPE, values )
    def __repr__( self ):
        return "TAG_Long_Array({!r})".format( self.tolist() )
    def _r( i ):
        return TAG_Long_Array( _rn( i, SIGNED_LONG_TYPE, _rah( i ) ) )
    _w = _wn

class TAG_List( list, _BaseTag ):
    """
    Represents a TAG_List.
    All tags in a TAG_List must be of the same type, recorded in listTagType (TAG_END for an empty list).
    """
    tagType = TAG_LIST

    __slots__ = "listTagType"

    def __init__( self, iterable=(), listTagType=None ):
        """
        iterable's values must be tags of a single type.
        listTagType is an optional tag class; if None it is taken from the first value.
        """
        super().__init__()
        self.listTagType = TAG_END if listTagType is None else listTagType.tagType
        for v in iterable:
            self.append( v )

    def append( self, value ):
        t = getattr( value, "tagType", None )
        if t is None:
            raise TypeError( "TAG_List values must be tags, got \"{}\".".format( value.__class__.__name__ ) )
        if self.listTagType == TAG_END:
            self.listTagType = t
        elif t != self.listTagType:
            raise WrongTagError( self.listTagType, t )
        _list_append( self, value )

    def __repr__( self ):
        return "TAG_List({})".format( list.__repr__( self ) )

    def _r( i ):
        t, l = _rlh( i )
        tag = TAG_List()
        tag.listTagType = t
        if l > 0:
            #A non-empty list of TAG_End is meaningless
            if t == TAG_END:
                raise WrongTagError( TAG_COMPOUND, t )
            c = _TAGCLASS[ t ]
            for _ in range( l ):
                _list_append( tag, c._r( i ) )
        return tag

    def _w( self, o ):
        _wlh( self.listTagType, len( self ), o )
        for t in self:
            t._w( o )

class TAG_Compound( OrderedDict, _BaseTag ):
    """
    Represents a TAG_Compound.
    TAG_Compound is an OrderedDict subclass whose keys are restricted to str and whose values are restricted to tags.
    """
    tagType = TAG_COMPOUND

    __slots__ = ()

    def __setitem__( self, key, value ):
        if not isinstance( key, str ):
            raise TypeError( "Attempted to set a non-str key on TAG_Compound." )
        if not hasattr( value, "tagType" ):
            raise TypeError( "TAG_Compound values must be tags, got \"{}\".".format( value.__class__.__name__ ) )
        _od_setitem( self, key, value )

    byte      = _makeTagSetter( "byte",      TAG_Byte       )
    short     = _makeTagSetter( "short",     TAG_Short      )
    int       = _makeTagSetter( "int",       TAG_Int        )
    long      = _makeTagSetter( "long",      TAG_Long       )
    float     = _makeTagSetter( "float",     TAG_Float      )
    double    = _makeTagSetter( "double",    TAG_Double     )
    bytearray = _makeTagSetter( "bytearray", TAG_Byte_Array )
    string    = _makeTagSetter( "string",    TAG_String     )
    list      = _makeTagSetter( "list",      TAG_List       )
    intarray  = _makeTagSetter( "intarray",  TAG_Int_Array  )
    longarray = _makeTagSetter( "longarray", TAG_Long_Array )
    #compound = (outside of class)

    def _r( i, tag=None ):
        if tag is None:
            tag = TAG_Compound()
        tt = _rb( i )
        while tt != TAG_END:
            _avtt( tt )
            name = _rst( i )
            if name in tag:
                raise DuplicateNameError( name )
            _od_setitem( tag, name, _TAGCLASS[tt]._r( i ) )
            tt = _rb( i )
        return tag

    def _w( self, o ):
        for n,t in self.items():
            _wtn( t.tagType, n, o )
            t._w( o )
        o.write( b"\0" )

class NBTDocument( TAG_Compound ):
    """
    Represents an NBT document: a named TAG_Compound that serves as the root of the tree.
    Schematic containers are named "Schematic".
    """
    __slots__ = ( "name", )

    def __init__( self, name="", *args, **kwargs ):
        super().__init__( *args, **kwargs )
        self.name = name

    def toBytes( self, compression="gzip" ):
        """
        Returns this document encoded as NBT.
        compression can be None, "gzip", or "zlib". Defaults to "gzip".
        """
        with BytesIO() as o:
            self._w( o )
            return compress( o.getvalue(), compression )

    def write( self, target, compression="gzip" ):
        """
        Writes this document to target.
        target can be the path of the file to write to (as a str), or a writable file-like object.
        compression can be None, "gzip", or "zlib". Defaults to "gzip".
        """
        data = self.toBytes( compression )
        if isinstance( target, str ):
            with open( target, "wb" ) as file:
                file.write( data )
        else:
            target.write( data )

    def _r( i ):
        name = _retn( i, TAG_COMPOUND )
        return TAG_Compound._r( i, NBTDocument( name ) )

    def _w( self, o ):
        _wtn( TAG_COMPOUND, self.name, o )
        super()._w( o )

    def __repr__( self ):
        return "NBTDocument({!r}, {!r})".format( self.name, dict( self ) )

#Note: Have to create this method here because TAG_Compound doesn't exist until this point:
TAG_Compound.compound = _makeTagSetter( "compound", TAG_Compound )

#Tuple of tag classes indexed by tagType.
_TAGCLASS = (
    None,           #TAG_END
    TAG_Byte,       #TAG_BYTE
    TAG_Short,      #TAG_SHORT
    TAG_Int,        #TAG_INT
    TAG_Long,       #TAG_LONG
    TAG_Float,      #TAG_FLOAT
    TAG_Double,     #TAG_DOUBLE
    TAG_Byte_Array, #TAG_BYTE_ARRAY
    TAG_String,     #TAG_STRING
    TAG_List,       #TAG_LIST
    TAG_Compound,   #TAG_COMPOUND
    TAG_Int_Array,  #TAG_INT_ARRAY
    TAG_Long_Array  #TAG_LONG_ARRAY
)

def _checkCompression( compression ):
    if compression not in COMPRESSION_TYPES:
        raise ValueError( "Unknown compression type \"{}\".".format( compression ) )

def compress( data, compression="gzip" ):
    """Compresses data (bytes) with the given compression type (None, "gzip", or "zlib")."""
    _checkCompression( compression )
    if compression == "gzip":
        return gzip.compress( data )
    elif compression == "zlib":
        return zlib.compress( data )
    return bytes( data )

def decompress( data, compression="gzip" ):
    """Decompresses data (bytes) with the given compression type (None, "gzip", or "zlib")."""
    _checkCompression( compression )
    if compression == "gzip":
        return gzip.decompress( data )
    elif compression == "zlib":
        return zlib.decompress( data )
    return bytes( data )

def fromBytes( data, compression="gzip" ):
    """
    Parses an NBT document from data (bytes) and returns an NBTDocument.
    compression can be None, "gzip", or "zlib". Defaults to "gzip".
    Trailing bytes after the root compound are ignored.
    """
    with BytesIO( decompress( data, compression ) ) as i:
        return NBTDocument._r( i )

def read( source, compression="gzip" ):
    """
    Parses an NBT file from source and returns an NBTDocument.
    source can be the path of the file to read from (as a str), or a readable file-like object.
    compression can be None, "gzip", or "zlib". Defaults to "gzip".
    """
    if isinstance( source, str ):
        with open( source, "rb" ) as file:
            data = file.read()
    else:
        data = source.read()
    return fromBytes( data, compression )
