"""Default trait and world constants.

These values define the starting genome of the founding population, the
legal range of every heritable trait and how far a single mutation may
move it. They directly set how quickly selection can act.

Design Philosophy:
    Wide trait ranges with small mutation steps give gradual, observable
    drift. Larger steps (see the high-mutation preset) speed evolution up
    at the cost of noisier populations.
"""

# =============================================================================
# FOUNDING POPULATION
# =============================================================================
INITIAL_POPULATION = 10
INITIAL_SPEED = 10
INITIAL_SENSE_RANGE = 150
INITIAL_SIZE = 1.0
INITIAL_FERTILITY = 1.0
INITIAL_ENERGY_EFFICIENCY = 1.0
INITIAL_MAX_AGE = 200
INITIAL_AGGRESSION = 0.5
INITIAL_DEFENSE = 0.5
INITIAL_METABOLISM = 1.0
INITIAL_HEAT_TOLERANCE = 0.5
INITIAL_COLD_TOLERANCE = 0.5

# =============================================================================
# TRAIT BOUNDS AND MUTATION STEPS
# =============================================================================
# Integer traits (speed, sense range, max age) mutate by whole steps.
SPEED_MIN, SPEED_MAX, SPEED_MUTATION = 1, 30, 2
SENSE_RANGE_MIN, SENSE_RANGE_MAX, SENSE_RANGE_MUTATION = 50, 400, 20
SIZE_MIN, SIZE_MAX, SIZE_MUTATION = 0.5, 2.0, 0.15
FERTILITY_MIN, FERTILITY_MAX, FERTILITY_MUTATION = 0.5, 1.5, 0.1
EFFICIENCY_MIN, EFFICIENCY_MAX, EFFICIENCY_MUTATION = 0.5, 1.5, 0.1
MAX_AGE_MIN, MAX_AGE_MAX, MAX_AGE_MUTATION = 100, 400, 20
AGGRESSION_MIN, AGGRESSION_MAX, AGGRESSION_MUTATION = 0.0, 1.0, 0.1
DEFENSE_MIN, DEFENSE_MAX, DEFENSE_MUTATION = 0.0, 1.0, 0.1
METABOLISM_MIN, METABOLISM_MAX, METABOLISM_MUTATION = 0.5, 1.5, 0.1
TOLERANCE_MIN, TOLERANCE_MAX, TOLERANCE_MUTATION = 0.0, 1.0, 0.1

# =============================================================================
# WORLD
# =============================================================================
WORLD_WIDTH = 800
WORLD_HEIGHT = 600
SPAWN_MARGIN = 50  # Food never spawns closer than this to an edge

# =============================================================================
# FOOD AND REPRODUCTION
# =============================================================================
FOOD_PER_DAY = 5
FOOD_SIZE = 8.0
PATTERN_ROTATION_DAYS = 10
REPRODUCTION_PROBABILITY = 0.7
MIN_REPRODUCTION_CHANCE = 0.1
MAX_REPRODUCTION_CHANCE = 0.95
SPAWN_DISTANCE = 30.0
MOVEMENT_PHASE_DURATION = 25.0  # Simulated seconds before a stalled day is ended

# =============================================================================
# BODY
# =============================================================================
BASE_ORGANISM_RADIUS = 10.0
SIZE_SPEED_PENALTY = 0.5  # Largest organisms lose half their speed
MIN_SIZE_SPEED_FACTOR = 0.3

# =============================================================================
# ENERGY
# =============================================================================
MAX_ENERGY = 100.0
ENERGY_COST_PER_MOVE = 0.05
ENERGY_GAIN_FROM_FOOD = 80.0
METABOLISM_ENERGY_COST = 0.1

# =============================================================================
# CONTESTS
# =============================================================================
FOOD_CONTEST_RANGE = 15.0
CONTEST_AGGRESSION_WEIGHT = 50.0
CONTEST_RANDOM_RANGE = 30.0
CONTEST_SIZE_WEIGHT = 10.0
CONTEST_DEFENSE_PENALTY = 20.0

# =============================================================================
# TEMPERATURE
# =============================================================================
BASE_TEMPERATURE = 20.0
TEMPERATURE_ENERGY_MULTIPLIER = 0.02
TEMPERATURE_DEATH_THRESHOLD = 25.0
TOLERANCE_COST_REDUCTION = 0.8

# =============================================================================
# DAY/NIGHT AND SEASONS
# =============================================================================
DAY_NIGHT_CYCLE_DURATION = 60.0
NIGHT_DARKNESS_THRESHOLD = 0.3
NIGHT_SENSE_RANGE_MULTIPLIER = 0.5
NIGHT_ENERGY_MULTIPLIER = 0.8
DAYS_PER_SEASON = 10

# =============================================================================
# SPECIATION
# =============================================================================
# Normalized Euclidean (RMS) distance between child and parent across all
# traits. A typical birth lands near 0.055; with default mutation steps
# roughly one birth in fifty reaches 0.07.
SPECIATION_THRESHOLD = 0.07
