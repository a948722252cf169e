"""Valid values for every gene dimension."""

BODY_TYPES = ['athletic', 'stocky', 'slim', 'fluffy', 'tiny']

EAR_TYPES = ['floppy', 'pointed', 'small', 'large']

TAIL_TYPES = ['curly', 'straight', 'bushy', 'short']

MARKING_PATTERNS = ['solid', 'spotted', 'striped', 'patched']

TEMPERAMENTS = ['playful', 'lazy', 'energetic', 'sophisticated', 'goofy']

TALENTS = ['singing', 'acting', 'sports', 'comedy', 'modeling']

SPECIAL_TRAITS = ['redCarpet', 'paparazziMagnet', 'awardWinner']

COAT_COLORS = [
    '#8B4513',  # Brown
    '#FFFFFF',  # White
    '#000000',  # Black
    '#D2B48C',  # Tan
    '#FFD700',  # Golden
    '#C0C0C0',  # Silver
    '#A0522D',  # Sienna
    '#F5DEB3',  # Wheat
    '#8B8B8B',  # Gray
    '#FF8C00',  # Dark Orange
]

DEFAULT_CELEBRITY_HEAD = 'celeb_001'
