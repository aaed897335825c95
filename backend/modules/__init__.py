"""
Feature modules for the Gavel backend.

- auth: bearer JWT validation into an AuthenticatedUser
- debates: lifecycle state machine, turn gate, voting, winner resolution,
  prize settlement, their stores and the deadline reconciler
- reputation: numeric reputation deltas recorded when a debate settles

Pure engines take a DebatePolicy and never touch storage; services own
locking and persistence and are what routes depend on, through the
Protocols in each module's interfaces.py.
"""
