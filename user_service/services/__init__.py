"""Services Layer — repository and use case for user records.

Invariants:
    - SqlUserRepository is the only code that touches the user table
    - UserUsecase is the only caller of the repository
"""
