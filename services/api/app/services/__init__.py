"""Business logic services.

Services contain all business logic and are called by routes.
The cache-aside policy for students lives here; stores stay policy-free.
"""
