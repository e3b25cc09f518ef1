"""
Service layer.

Each service wraps one area of the application over an ``AsyncSession``
and the shared ``CacheManager``. Services raise ``JobFairError`` subclasses
for expected failures; the exception handlers turn them into responses.
"""
