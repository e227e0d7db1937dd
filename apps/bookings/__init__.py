"""Bookings app package.

Owns the booking model and the availability checker. Creating a booking
locks the listing row inside a transaction, so the overlap check and the
insert cannot interleave with a concurrent request for the same listing.
"""
