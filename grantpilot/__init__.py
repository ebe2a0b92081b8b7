"""GrantPilot: guided business profile wizard and AI grant eligibility matching."""

__version__ = "0.1.0"
