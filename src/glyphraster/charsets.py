# Brightness ramp, darkest to brightest. Position is the quantization level.
GLYPH_PALETTE = " .:-=+*#%@"
LEVELS = len(GLYPH_PALETTE)

# Colour mode carries the shade in the escape run, so every cell uses one glyph
COLOUR_MARK = "@"

WHITE = (255, 255, 255)
