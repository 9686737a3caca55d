# Ordered darkest/densest to lightest/sparsest; the last glyph is a space
GLYPH_RAMP = "$@B%8&WM#*oahkbdpqwmZO0QLCJUYXzcvunxrjft/\\|()1{}[]?-_+~<>i!lI;:,\"^`'. "

DARKEST = GLYPH_RAMP[0]
LIGHTEST = GLYPH_RAMP[-1]
