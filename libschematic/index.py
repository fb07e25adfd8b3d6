#This module maps cell coordinates to offsets within a schematic's flat Blocks / Data arrays.
#
#Schematic arrays are one-dimensional and indexed in YZX order:
#    index = ( y * length + z ) * width + x
#where width, height and length are the sizes of the region along the X, Y and Z axes respectively.
#X varies fastest, so (1,0,0) is index 1, (0,0,1) is index width, and (0,1,0) is index width * length.
#
#Whenever cells are enumerated, they are enumerated with X outermost, then Y, then Z innermost.
#Readers and writers must agree on this order to reproduce the same byte layout.

from libschematic.shared import MalformedInput, EmptyBoundsInput

def blockIndex( x, y, z, width, length ):
    """Returns the offset of the cell at (x, y, z) in a region that is width cells wide and length cells long."""
    return ( y * length + z ) * width + x

def inBounds( x, y, z, width, height, length ):
    """Returns True if (x, y, z) lies within a width x height x length region with its minimum corner at the origin."""
    return 0 <= x < width and 0 <= y < height and 0 <= z < length

def iterCells( width, height, length ):
    """
    Generator that iterates over every cell of a width x height x length region.
    For each cell, yields a tuple ( x, y, z, index ).
    """
    for x in range( width ):
        for y in range( height ):
            for z in range( length ):
                yield x, y, z, ( y * length + z ) * width + x

def growBuffer( buffer, index ):
    """
    Extends buffer (a bytearray) with zero bytes so that index is a valid offset into it.
    Buffers are never shrunk.
    """
    l = len( buffer )
    if l <= index:
        buffer.extend( bytes( index - l + 1 ) )
    return buffer

def getBounds( positions ):
    """
    Computes the bounding box of positions, an iterable of ( x, y, z ) tuples.
    Returns a tuple ( minimum, size ), where minimum is the ( x, y, z ) of the box's minimum corner
    and size is its ( width, height, length ).
    Raises EmptyBoundsInput if positions is empty.
    """
    it = iter( positions )
    try:
        minX, minY, minZ = maxX, maxY, maxZ = next( it )
    except StopIteration:
        raise EmptyBoundsInput() from None

    for x, y, z in it:
        if   x < minX: minX = x
        elif x > maxX: maxX = x
        if   y < minY: minY = y
        elif y > maxY: maxY = y
        if   z < minZ: minZ = z
        elif z > maxZ: maxZ = z

    return ( minX, minY, minZ ), ( maxX - minX + 1, maxY - minY + 1, maxZ - minZ + 1 )

def boundsFromBox( minimum, maximum ):
    """
    Returns ( minimum, size ) for the box spanning minimum to maximum (both inclusive ( x, y, z ) corners).
    Raises MalformedInput if maximum is less than minimum on any axis.
    """
    size = tuple( b - a + 1 for a, b in zip( minimum, maximum ) )
    if len( size ) != 3:
        raise MalformedInput( "Bounding box corners must have exactly 3 coordinates." )
    if min( size ) < 1:
        raise MalformedInput( "Bounding box maximum {!r} is less than its minimum {!r}.".format( tuple( maximum ), tuple( minimum ) ) )
    return tuple( minimum ), size
