"""Template-driven payment-request forms"""

__version__ = "0.1.0"
