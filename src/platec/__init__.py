"""ProjectPlatec - school administration backend.

Manages teacher accounts on top of the platec_identity user directory and
reconciles roles and the seeded administrator on startup.
"""
