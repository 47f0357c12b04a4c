"""Business logic services.

Services contain all business rules (validation, pagination) and are called
by routes. Services accept their stores explicitly.
"""
