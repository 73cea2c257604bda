# Repositories package init
"""
Cash Card Service — Repository Layer
======================================

What:  The store interface between services and the database.
Why:   Services depend on a small Protocol, not on SQLAlchemy queries, so the
       storage backend can be swapped and services can be tested with mocks.

Repository Inventory:
    - CashCardRepository (Protocol) / SqlCashCardRepository: card CRUD by id
    - UserRepository (Protocol) / SqlUserRepository: principal lookup

Each Sql* adapter is constructed with the request's AsyncSession. Writes are
flushed, not committed; the session dependency owns the transaction.
"""
