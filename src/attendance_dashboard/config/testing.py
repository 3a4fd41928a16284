SECRET_KEY = "test-secret"

API_BASE_URL = "http://attendance.test"
REQUEST_TIMEOUT_SECONDS = 10

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
