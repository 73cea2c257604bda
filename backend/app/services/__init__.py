# Services package init
"""
Cash Card Service — Services Layer
====================================

What:  Business logic layer sitting between routes (HTTP) and repositories (persistence).
Why:   Routes handle HTTP; services handle business rules.
How:   Each service wraps a repository Protocol; `with_session()` builds the
       SQLAlchemy-backed variant for a request's session.

Service Inventory:
    - CashCardService: owner-scoped card CRUD, paging, error translation
    - UserService: credential checks and user creation
"""
