# Constants for simulating load on a smart grid

REGIONS = ["North", "South", "East", "West", "Central"]

# Node capacity is the base capacity plus up to this much extra (MW)
NODE_CAPACITY_SPREAD = 50.0

# Load sources
SOURCE_CONSUMER = "CONSUMER"
SOURCE_PRODUCER = "PRODUCER"  # e.g. solar panels, negative load
PRODUCER_EVERY = 5  # every 5th source is a producer
SOURCE_BASE_LOAD_RANGE = (10.0, 40.0)  # MW
SOURCE_VARIABILITY_RANGE = (0.3, 0.7)

# Sensor measurements
VOLTAGE_RANGE = (400.0, 420.0)  # kV
FREQUENCY_RANGE = (60.0, 60.5)  # Hz

# Load balancer
ACTION_LOAD_TRANSFER = "LOAD_TRANSFER"
MAX_TRANSFER_SHARE = 0.5  # never fill more than half of a receiver's headroom at once
