"""
libschematic is a library for reading and writing Schematic files for Python 3.
It converts between a schematic's legacy block ids / metadata and a host application's modern block states,
and includes a small NBT codec for the schematic container itself.
"""

#NBT Tag Types, Exceptions
from libschematic.shared import (
    TAG_END, TAG_BYTE, TAG_SHORT, TAG_INT, TAG_LONG, TAG_FLOAT, TAG_DOUBLE, TAG_BYTE_ARRAY, TAG_STRING, TAG_LIST, TAG_COMPOUND, TAG_INT_ARRAY, TAG_LONG_ARRAY,
    NBTFormatError, WrongTagError, DuplicateNameError, UnknownTagTypeError, OutOfBoundsError,
    SchematicError, MalformedContainer, MalformedInput, EmptyBoundsInput, DecodeFailed,
    BlockStateError, StateSerializeError, StateDeserializeError, LegacyUpgradeError
)

#NBTDocument and TAG_* Classes
from libschematic.tag import NBTDocument, TAG_Byte, TAG_Short, TAG_Int, TAG_Long, TAG_Float, TAG_Double, TAG_Byte_Array, TAG_String, TAG_List, TAG_Compound, TAG_Int_Array, TAG_Long_Array

#Coordinate index
from libschematic.index import blockIndex, inBounds, iterCells, getBounds

#Block state <-> legacy id mapping
from libschematic.mapping import stateKey, BlockStateAuthority, DictAuthority, LegacyMappingTable

#Block id fixups
from libschematic.fixup import KEEP_META, FIXUPS_POCKET, FIXUPS_LEGACY, fixBlock

#Schematics
from libschematic.schematic import (
    DIALECT_UNKNOWN, DIALECT_CLASSIC, DIALECT_ALPHA, DIALECT_POCKET,
    PositionedBlock, Schematic, exportBlocks, read
)


#Export everything we imported above
__all__ = [
    "TAG_END", "TAG_BYTE", "TAG_SHORT", "TAG_INT", "TAG_LONG", "TAG_FLOAT", "TAG_DOUBLE", "TAG_BYTE_ARRAY", "TAG_STRING", "TAG_LIST", "TAG_COMPOUND", "TAG_INT_ARRAY", "TAG_LONG_ARRAY",
    "NBTFormatError", "WrongTagError", "DuplicateNameError", "UnknownTagTypeError", "OutOfBoundsError",
    "SchematicError", "MalformedContainer", "MalformedInput", "EmptyBoundsInput", "DecodeFailed",
    "BlockStateError", "StateSerializeError", "StateDeserializeError", "LegacyUpgradeError",
    "NBTDocument", "TAG_Byte", "TAG_Short", "TAG_Int", "TAG_Long", "TAG_Float", "TAG_Double", "TAG_Byte_Array", "TAG_String", "TAG_List", "TAG_Compound", "TAG_Int_Array", "TAG_Long_Array",
    "blockIndex", "inBounds", "iterCells", "getBounds",
    "stateKey", "BlockStateAuthority", "DictAuthority", "LegacyMappingTable",
    "KEEP_META", "FIXUPS_POCKET", "FIXUPS_LEGACY", "fixBlock",
    "DIALECT_UNKNOWN", "DIALECT_CLASSIC", "DIALECT_ALPHA", "DIALECT_POCKET",
    "PositionedBlock", "Schematic", "exportBlocks", "read"
]
