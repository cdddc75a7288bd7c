"""Booking domain - slots, availability, admission and the booking store"""
