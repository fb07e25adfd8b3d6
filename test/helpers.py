import libschematic

#A handful of legacy blocks, enough to exercise fixups and duplicate upgrades.
LEGACY = {
    ( 0,   0 ): ( "minecraft:air",           {} ),
    ( 1,   0 ): ( "minecraft:stone",         { "stone_type": "stone" } ),
    ( 1,   1 ): ( "minecraft:stone",         { "stone_type": "granite" } ),
    #Planks 5:8 is an alias of 5:0 once upgraded
    ( 5,   0 ): ( "minecraft:planks",        { "wood_type": "oak" } ),
    ( 5,   8 ): ( "minecraft:planks",        { "wood_type": "oak" } ),
    ( 5,   1 ): ( "minecraft:planks",        { "wood_type": "spruce" } ),
    ( 17,  0 ): ( "minecraft:log",           { "old_log_type": "oak", "pillar_axis": "y" } ),
    ( 17,  4 ): ( "minecraft:log",           { "pillar_axis": "x", "old_log_type": "oak" } ),
    ( 20,  0 ): ( "minecraft:glass",         {} ),
    ( 102, 0 ): ( "minecraft:glass_pane",    {} ),
}
for _m, _wood in enumerate( ( "oak", "spruce", "birch", "jungle", "acacia", "dark_oak" ) ):
    LEGACY[85, _m] = ( "minecraft:fence", { "wood_type": _wood } )
for _m, _color in enumerate( ( "white", "orange", "magenta" ) ):
    LEGACY[241, _m] = ( "minecraft:stained_glass", { "color": _color } )
    LEGACY[158, _m] = ( "minecraft:wooden_slab",   { "wood_type": ( "oak", "spruce", "birch" )[_m] } )

def state( name, **properties ):
    """Returns the DictAuthority state handle for the given name and properties."""
    return libschematic.DictAuthority.makeState( name, properties )

AIR      = state( "minecraft:air" )
STONE    = state( "minecraft:stone", stone_type="stone" )
GRANITE  = state( "minecraft:stone", stone_type="granite" )
OAK      = state( "minecraft:planks", wood_type="oak" )
SPRUCE   = state( "minecraft:planks", wood_type="spruce" )
UNKNOWN  = state( "minecraft:info_update" )
#Known to nobody; can't be serialized
COPPER   = state( "minecraft:copper_block" )

def makeTable( legacy=LEGACY ):
    return libschematic.LegacyMappingTable( libschematic.DictAuthority( legacy ) )
