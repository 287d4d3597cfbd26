"""FarmInvest Lite: investment records API and client.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
