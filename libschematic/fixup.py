#This module contains block id substitution tables applied when importing schematics that weren't exported in the Pocket dialect.
#
#PC and Pocket Edition numbered some blocks differently. The most visible case is fences:
#PC gave every wood type its own block id (188-192), while Pocket Edition uses a single fence block (85) with the wood type in its metadata:
#    0 = oak, 1 = spruce, 2 = birch, 3 = jungle, 4 = acacia, 5 = dark oak
#PC's ids are ordered spruce, birch, jungle, dark oak, acacia, so the mapping is not monotonic: 191 (dark oak) -> 5, 192 (acacia) -> 4.
#
#Each table maps a source block id to a tuple ( replacement id, replacement meta ).
#A replacement meta of KEEP_META keeps the cell's original metadata.
#Ids that aren't in a table pass through unchanged.

#Replacement meta that keeps the original metadata value.
KEEP_META = None

#Pocket Edition block ids used as replacements
_STAINED_GLASS      = 241
_WOODEN_SLAB        = 158
_DOUBLE_WOODEN_SLAB = 157
_FENCE              = 85
_GLASS              = 20
_GLASS_PANE         = 102

#PC -> Pocket Edition. This is the table used by default.
FIXUPS_POCKET = {
    95:  ( _STAINED_GLASS,      KEEP_META ),
    126: ( _WOODEN_SLAB,        KEEP_META ),
    125: ( _DOUBLE_WOODEN_SLAB, KEEP_META ),
    188: ( _FENCE,              1         ), #Spruce
    189: ( _FENCE,              2         ), #Birch
    190: ( _FENCE,              3         ), #Jungle
    191: ( _FENCE,              5         ), #Dark oak
    192: ( _FENCE,              4         ), #Acacia
}

#First generation table.
#Every replacement discards the original metadata: stained glass and panes are flattened to their uncoloured variants,
#slabs lose their wood type, and fence wood types are assigned in PC id order.
#Kept for reproducing imports made with that generation; it swaps acacia and dark oak fences.
FIXUPS_LEGACY = {
    126: ( _WOODEN_SLAB,        0         ),
    95:  ( _GLASS,              0         ),
    160: ( _GLASS_PANE,         0         ),
    125: ( _DOUBLE_WOODEN_SLAB, 0         ),
    188: ( _FENCE,              1         ),
    189: ( _FENCE,              2         ),
    190: ( _FENCE,              3         ),
    191: ( _FENCE,              4         ),
    192: ( _FENCE,              5         ),
}

def fixBlock( id, meta, fixups=FIXUPS_POCKET ):
    """
    Returns the ( id, meta ) pair that the legacy block id:meta should be replaced with according to the given table.
    If id isn't in the table, returns ( id, meta ) unchanged.
    """
    r = fixups.get( id )
    if r is None:
        return id, meta
    newID, newMeta = r
    return newID, meta if newMeta is KEEP_META else newMeta
