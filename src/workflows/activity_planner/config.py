"""Runtime settings for the activity planner workflows, read from the environment."""

import os

ADDRESS = os.getenv("TEMPORAL_ADDRESS", "localhost:7233")
TASK_QUEUE = os.getenv("ACTIVITY_PLANNER_TASK_QUEUE", "activity-planner-task-queue")

MODEL = os.getenv("OPENAI_MODEL", "gpt-4.1-mini")
SEARCH_MODEL = os.getenv("OPENAI_SEARCH_MODEL", "gpt-5-mini")

GEOCODING_URL = os.getenv("GEOCODING_URL", "https://geocoding-api.open-meteo.com/v1/search")
FORECAST_URL = os.getenv("FORECAST_URL", "https://api.open-meteo.com/v1/forecast")
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))

# Temporal needs an upper bound per activity; generation can be slow.
ACTIVITY_TIMEOUT_SECONDS = float(os.getenv("ACTIVITY_TIMEOUT_SECONDS", "600"))

ECHO_STREAM = os.getenv("ECHO_STREAM", "1").lower() not in {"0", "false", "no"}
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
