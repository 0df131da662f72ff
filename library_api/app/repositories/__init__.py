"""
Persistence layer.

Repositories hide SQL behind lookup, save and delete methods.  They
are constructed with the database path and handed to services by the
app factory.
"""
