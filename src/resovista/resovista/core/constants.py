"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

SERVICE_NAME = "ResoVista Backend"
DEFAULT_API_PREFIX = "/api"

# Bearer tokens: 7 days
DEFAULT_TOKEN_MAX_AGE = 7 * 24 * 3600

DEFAULT_BUCKET_NAME = "resovista-documents"
MAX_UPLOAD_BYTES = 52428800  # 50MB
SIGNED_URL_TTL = 31536000  # 1 year

MIN_PASSWORD_LENGTH = 6

# Focus losses tolerated before an exam is auto-submitted
MAX_TAB_SWITCHES = 3

CERTIFICATE_NUMBER_PREFIX = "RESOVISTA"

# Grade letter -> minimum percentage, checked in order
GRADE_THRESHOLDS = (
    ("A+", 90),
    ("A", 80),
    ("B+", 70),
    ("B", 60),
    ("C", 50),
    ("D", 40),
)
FAILING_GRADE = "F"
