"""
FixItNow Job Lifecycle Service.

Job state machine, settlement, invoicing, cash confirmation and payouts
for the FixItNow home-services marketplace.
"""

__version__ = "0.1.0"
__author__ = "FixItNow Team"
__description__ = "FixItNow Job Lifecycle Service"
