"""Donation application for the blood-donation backend.

Holds the donor/hospital user records, blood requests, the lifecycle
services that keep the two consistent and the realtime broadcast of
their state changes.
"""
