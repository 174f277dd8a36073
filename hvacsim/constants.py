"""
Physical constants, unit conversions and simulation defaults.
These are shared by the appliance models, the billing aggregator and the CLI.
"""

# Energy Content
BTU_PER_CCF_NATURAL_GAS = 103700.0   # 1 CCF (100 cu ft) of natural gas
BTU_PER_KWH = 3412.14
CUBIC_METRES_PER_CCF = 2.8316846592

# Fuel Usage Carriers (keys of HVACApplianceResponse.fuel_usage)
NATURAL_GAS_CCF_PER_HOUR = "naturalGasCcfPerHour"
ELECTRICITY_KWH_PER_HOUR = "electricityKwhPerHour"
FUEL_CARRIERS = (NATURAL_GAS_CCF_PER_HOUR, ELECTRICITY_KWH_PER_HOUR)

# National Fuel Gas Code: inputs derated 4% per 1,000 ft above sea level
# for installations above 2,000 ft.
ELEVATION_DERATE_THRESHOLD_FEET = 2000.0
ELEVATION_DERATE_PER_1000_FEET = 0.04

# Building Defaults
DEFAULT_HEATING_SETPOINT_C = 20.0
DEFAULT_COOLING_SETPOINT_C = 26.0
DEFAULT_FLOOR_AREA_SQ_FT = 2500.0
DEFAULT_UA_PER_SQ_FT = 0.25          # BTU/hr/F per sq ft of floor space
DEFAULT_SOLAR_GAIN_FACTOR = 15.0     # BTU/hr per W/m^2 of irradiance
DEFAULT_INTERNAL_GAINS = 2000.0      # BTU/hr (people, appliances)

# Prices
DEFAULT_ELECTRICITY_PRICE_PER_KWH = 0.13
DEFAULT_NATURAL_GAS_PRICE_PER_CUBIC_METRE = 0.45

# Simulation
DEFAULT_TIME_STEP = "1h"
