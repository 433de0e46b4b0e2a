"""
Domain layer: entities, events, repository interfaces and domain services.
"""
