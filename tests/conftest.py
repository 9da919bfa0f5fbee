import os

from hypothesis import HealthCheck, settings

# Parsing deeply nested input can be slow on shared runners.
settings.register_profile(
    "monkey", deadline=None, suppress_health_check=[HealthCheck.too_slow]
)
settings.register_profile("thorough", parent=settings.get_profile("monkey"), max_examples=2000)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "monkey"))
