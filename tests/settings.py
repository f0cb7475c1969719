SECRET_KEY = "insecure-tests-only"

INSTALLED_APPS = []

TIME_ZONE = "Europe/Amsterdam"
USE_TZ = True

# Use a small chunk size, so tokenizing happens in multiple steps.
GPXPARSER_CHUNK_SIZE = 512
