"""
Volume Binder — The Matchmaker

Matching core of the persistent volume claim binder.
Responsibilities:
- Keep persistent volumes indexed by access modes
- Order candidate volumes by storage capacity
- Pick the smallest unbound volume that satisfies a claim
"""
