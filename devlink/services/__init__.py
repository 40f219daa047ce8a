"""Services Layer — account service and the profile/post mutation engines.

Invariants:
    - Services talk to persistence only through core/repository_protocols.DocumentStore
    - Pure document transforms live in core/; services load, apply, commit

Design Decisions:
    - One service class per document family for locality
"""
