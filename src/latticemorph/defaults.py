"""Default values shared across the tessellation engine."""

# Stipple mode seeds this many points unless the request overrides it.
STIPPLE_POINT_COUNT = 2000

# Stipple dots never shrink below this radius, so white regions still show a dot.
MIN_DOT_RADIUS = 0.5

# Pixels with alpha below this are ignored when building a palette.
ALPHA_THRESHOLD = 128

# Palette sizes outside this range turn quantization into a no-op.
MIN_PALETTE_COLORS = 2
MAX_PALETTE_COLORS = 256

# Palette construction looks at no more than this many (stride-sampled) pixels.
MAX_PALETTE_SAMPLES = 5000

# Pixels are remapped in chunks of this size to bound the (pixels x palette) distance table.
REMAP_CHUNK = 4096

# Constants of the sine hash behind the "random" alternation pattern.
HASH_COL = 12.9898
HASH_ROW = 78.233
HASH_SCALE = 43758.5453

# Sites whose second-to-first singular value ratio falls below this are treated as collinear.
COLLINEAR_TOL = 1e-12
