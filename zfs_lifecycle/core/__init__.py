"""Domain types: value objects, entities, exceptions and the Result type"""
