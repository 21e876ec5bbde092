"""Constants for the Fronius exporter."""

# API endpoints
API_PATH = "/solar_api/v1"
ENDPOINT_INVERTER_INFO = "/GetInverterInfo.cgi"
ENDPOINT_INVERTER_REALTIME_DATA = "/GetInverterRealtimeData.cgi"

# Realtime data query values
SCOPE_DEVICE = "Device"
DATA_COLLECTION_COMMON = "CommonInverterData"
DATA_COLLECTION_THREE_PHASE = "3PInverterData"

USER_AGENT = "fronius-exporter"
DEFAULT_TIMEOUT = 15.0
DEFAULT_LISTEN_ADDRESS = ":9109"

PHASES = ("L1", "L2", "L3")
