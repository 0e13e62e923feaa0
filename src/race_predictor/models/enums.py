"""Enumerations and physical constants for the race prediction engine.

All thresholds and constants cite their published research source where one
exists; the remaining values are engine calibration choices.
"""

from enum import Enum, IntEnum, auto


class PerformanceSource(str, Enum):
    """Where a performance record came from."""

    RACE = "race"
    TIME_TRIAL = "time_trial"
    WORKOUT_SEGMENT = "workout_segment"


class ConfidenceLevel(str, Enum):
    """Overall confidence label attached to an engine result."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SignalStatus(IntEnum):
    """Whether an extractor fired, was skipped, or had no data to look at."""

    FIRED = auto()
    SKIPPED = auto()
    NOT_APPLICABLE = auto()


# ---------------------------------------------------------------------------
# Unit conversions and reference distances
# ---------------------------------------------------------------------------
METERS_PER_MILE = 1609.34

# Standard prediction distances: (label, metres, miles)
PREDICTION_DISTANCES: tuple[tuple[str, int, float], ...] = (
    ("5K", 5000, 3.107),
    ("10K", 10000, 6.214),
    ("Half Marathon", 21097, 13.109),
    ("Marathon", 42195, 26.219),
)

# Reference distance the fitness index is inverted at before endurance scaling
REFERENCE_DISTANCE_M = 5000.0

# ---------------------------------------------------------------------------
# Daniels & Gilbert oxygen cost: Daniels & Gilbert (1979), Oxygen Power
# VO2 = A + B*v + C*v^2, v in metres per minute
# ---------------------------------------------------------------------------
DANIELS_A = -4.60
DANIELS_B = 0.182258
DANIELS_C = 0.000104

# Sustainable fraction of VO2max by effort duration (upper bound in minutes,
# fraction). Efforts longer than the last bound use PCT_MAX_LONG_EFFORT.
PCT_MAX_BY_DURATION: tuple[tuple[float, float], ...] = (
    (3.5, 0.80),
    (7.0, 0.85),
    (15.0, 0.90),
    (30.0, 0.93),
    (60.0, 0.95),
    (120.0, 0.97),
)
PCT_MAX_LONG_EFFORT = 0.98

# Physiologically plausible VDOT bounds
VDOT_MIN = 15.0
VDOT_MAX = 85.0
DEFAULT_VDOT = 40.0

# Riegel (1981). Athletic records and human endurance. Am Sci 69(3):285-290
RIEGEL_EXPONENT = 1.06

# ---------------------------------------------------------------------------
# Environmental pace corrections (seconds per mile)
# El Helou et al. (2012), Ely et al. (2007), Mantzios et al. (2022),
# Periard et al. (2021)
# ---------------------------------------------------------------------------
WEATHER_OPTIMAL_TEMP_F = 45.0
WEATHER_MILD_UPPER_F = 70.0
WEATHER_WARM_UPPER_F = 85.0
WEATHER_COLD_THRESHOLD_F = 35.0
WEATHER_MILD_S_PER_F = 0.4
WEATHER_WARM_S_PER_F = 1.0
WEATHER_SEVERE_S_PER_F = 1.5
WEATHER_COLD_S_PER_F = 0.2
HUMIDITY_HOT_TEMP_F = 65.0
HUMIDITY_HOT_THRESHOLD_PCT = 50.0
HUMIDITY_HOT_S_PER_PCT = 0.1
HUMIDITY_MODERATE_TEMP_F = 55.0
HUMIDITY_MODERATE_THRESHOLD_PCT = 60.0
HUMIDITY_MODERATE_S_PER_PCT = 0.05

# ~12 s/mile per 100 ft/mile of climbing
ELEVATION_S_PER_100FT_PER_MILE = 12.0

# A corrected race time never drops below this fraction of the recorded time
MIN_CORRECTED_TIME_FRACTION = 0.85

# ---------------------------------------------------------------------------
# Signal weights (source reliability)
# ---------------------------------------------------------------------------
WEIGHT_RACE = 1.0
WEIGHT_BEST_EFFORT = 0.65
WEIGHT_HR_VO2MAX = 0.5
WEIGHT_EF_TREND = 0.35
WEIGHT_CRITICAL_SPEED = 0.6
WEIGHT_TRAINING_PACE = 0.25
WEIGHT_SAVED_VDOT = 0.3
CONFIDENCE_SAVED_VDOT = 0.3

# ---------------------------------------------------------------------------
# Race signal
# ---------------------------------------------------------------------------
RACE_MIN_DISTANCE_M = 1000.0
RACE_HALF_LIFE_DAYS = 180.0
RACE_EFFORT_WEIGHTS = {"all_out": 1.0, "hard": 0.85}
RACE_EFFORT_WEIGHT_DEFAULT = 0.7
RACE_STALE_DAYS = 120
RACE_STALE_PENALTY = 0.8
RACE_VERY_STALE_DAYS = 240
RACE_VERY_STALE_PENALTY = 0.7
RACE_ALL_OUT_BONUS = 0.1

# ---------------------------------------------------------------------------
# Best-effort signal
# ---------------------------------------------------------------------------
BEST_EFFORT_SEGMENT_MIN_M = 5000.0
BEST_EFFORT_RACE_GRADE_MIN_M = METERS_PER_MILE
BEST_EFFORT_SEGMENT_DERATE = 0.97
BEST_EFFORT_HALF_LIFE_DAYS = 120.0
# Peak weighting: rank weight = 0.5 ** (rank / half-rank)
BEST_EFFORT_HALF_RANK = 2.0
BEST_EFFORT_STALE_DAYS = 90
BEST_EFFORT_STALE_PENALTY = 0.85
BEST_EFFORT_KEY_COUNT = 5

# ---------------------------------------------------------------------------
# HR-based effective VO2max
# Swain & Leutholtz (1997): %VO2R ≈ %HRR; Swain-Londeree regression
# ---------------------------------------------------------------------------
HR_STEADY_STATE_TYPES = frozenset({"easy", "steady", "long", "recovery", "marathon"})
HR_MIN_DISTANCE_MILES = 0.5
HR_MIN_DURATION_MIN = 15.0
HR_MIN_RESERVE_BPM = 20
HRR_MIN_FRACTION = 0.50
HRR_MAX_FRACTION = 0.92
SWAIN_SLOPE = 1.4854
SWAIN_INTERCEPT = -0.3702
HR_MIN_PCT_VO2MAX = 0.2
HR_HALF_LIFE_DAYS = 60.0
HR_FATIGUE_BPM_PER_TSB = 0.2
HR_FATIGUE_MAX_BPM = 6.0
HR_FRESHNESS_MAX_BOOST = 0.15
HR_FRESHNESS_TSB_FLOOR = -20.0
HR_RECENT_WINDOW_DAYS = 30
HR_RECENT_MIN_VALUES = 3
HR_KEY_COUNT = 5

# ---------------------------------------------------------------------------
# Efficiency-factor trend
# ---------------------------------------------------------------------------
EF_TYPES = frozenset({"easy", "steady", "long", "recovery"})
EF_MIN_DISTANCE_MILES = 1.0
EF_MIN_DURATION_MIN = 20.0
EF_WINDOW_DAYS = 90
EF_MIN_WORKOUTS = 5
# +3% EF over the window ≈ +1.5 VDOT
EF_PCT_PER_STEP = 0.03
EF_VDOT_PER_STEP = 1.5
EF_MAX_ADJUSTMENT = 3.0
EF_MIN_ADJUSTMENT = 0.1
EF_MIN_CONFIDENCE = 0.3
EF_MAX_CONFIDENCE = 0.8
EF_KEY_COUNT = 3

# ---------------------------------------------------------------------------
# Critical Speed: Poole et al. (2016), Smyth & Muniz-Pumares (2020)
# ---------------------------------------------------------------------------
CS_MIN_DATA_POINTS = 3
CS_MIN_DISTANCE_M = METERS_PER_MILE
CS_MAX_DISTANCE_M = 15000.0
CS_MAX_SPEED_M_PER_S = 10.0
# Critical speed sits at roughly 88% of VO2max
CS_PCT_VO2MAX = 0.88
CS_MIN_R_SQUARED = 0.95
CS_LOW_FIT_PENALTY = 0.8
# (upper bound in metres, bucket label); efforts above the last bound fall in "15K"
CS_DISTANCE_BUCKETS: tuple[tuple[float, str], ...] = (
    (2000.0, "1mi"),
    (4000.0, "3K"),
    (7000.0, "5K"),
    (12000.0, "10K"),
)
CS_LONG_BUCKET = "15K"

# ---------------------------------------------------------------------------
# Training pace inference: Daniels' Running Formula intensity bands
# ---------------------------------------------------------------------------
PACE_WINDOW_DAYS = 90
PACE_MIN_DISTANCE_MILES = 0.5
PACE_MIN_DURATION_MIN = 10.0
PACE_HALF_LIFE_DAYS = 60.0
PACE_KEY_COUNT = 3
PACE_PCT_VO2MAX_BY_TYPE = {
    "easy": 0.65,
    "recovery": 0.65,
    "long": 0.65,
    "tempo": 0.86,
    "threshold": 0.88,
}

# ---------------------------------------------------------------------------
# Blending
# ---------------------------------------------------------------------------
OUTLIER_DEVIATION_VDOT = 4.0
AGREEMENT_MIN = 0.1
AGREEMENT_STD_OFFSET = 0.5
AGREEMENT_STD_SCALE = 5.0
VDOT_RANGE_STD_MULTIPLIER = 1.5
FALLBACK_RANGE_HALF_WIDTH = 5.0

# ---------------------------------------------------------------------------
# Form adjustment from TSB / CTL: Banister impulse-response model output
# (percent of race time; positive = slower)
# ---------------------------------------------------------------------------
TSB_STALE_THRESHOLD = 25.0
TSB_FRESH_THRESHOLD = 5.0
TSB_FATIGUED_THRESHOLD = -10.0
TSB_OVERREACHED_THRESHOLD = -25.0
FORM_STALE_PCT = 0.5
FORM_TAPERED_PCT = -0.5
FORM_FATIGUED_PCT = 1.5
FORM_OVERREACHED_PCT = 3.0
CTL_THIN_BASE_THRESHOLD = 20.0
FORM_THIN_BASE_PCT = 1.0
# Best-case taper applied to tapered_seconds regardless of current form
OPTIMAL_TAPER_PCT = -0.5

# ---------------------------------------------------------------------------
# Endurance readiness
# ---------------------------------------------------------------------------
READINESS_WEIGHT_VOLUME = 0.40
READINESS_WEIGHT_LONG_RUN = 0.35
READINESS_WEIGHT_CONSISTENCY = 0.25
READINESS_CONSISTENCY_WEEKS = 12
READINESS_THRESHOLD = 0.7
# Slow-end range widening per unit of readiness shortfall below the threshold
READINESS_RANGE_PENALTY = 0.25
# label → (weekly miles as a multiple of race miles, long run miles)
DISTANCE_REQUIREMENTS: dict[str, tuple[float, float]] = {
    "5K": (2.0, 5.0),
    "10K": (2.0, 8.0),
    "Half Marathon": (2.5, 10.0),
    "Marathon": (3.0, 16.0),
}

# ---------------------------------------------------------------------------
# Prediction range and overall confidence
# ---------------------------------------------------------------------------
RANGE_PCT_SHORT = 0.025
RANGE_PCT_10K = 0.035
RANGE_PCT_LONG = 0.05
RANGE_CONFIDENCE_FACTORS = {
    ConfidenceLevel.HIGH: 0.85,
    ConfidenceLevel.MEDIUM: 1.0,
    ConfidenceLevel.LOW: 1.2,
}

RECENT_DATA_WINDOW_DAYS = 30
RECENT_DATA_MIN_WORKOUTS = 3
HIGH_CONFIDENCE_MIN_SIGNALS = 3
HIGH_CONFIDENCE_MIN_AGREEMENT = 0.6
MEDIUM_CONFIDENCE_MIN_SIGNALS = 2
MEDIUM_CONFIDENCE_MIN_AGREEMENT = 0.4
