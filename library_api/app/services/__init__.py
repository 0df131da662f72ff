"""
Service layer abstraction.

Each service encapsulates business logic for a domain.  Services
receive their repositories through the constructor, so API handlers
never talk to storage directly.
"""
