"""Reviews app package.

Guests review listings they have stayed at; every insert or delete
recomputes the listing's displayed rating.
"""
