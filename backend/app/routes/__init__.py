# Routes package init
"""
Cash Card Service — API Routes Package
========================================

Route Inventory:
    - cash_cards.py:  POST   /cashcards           (create, 201 + Location)
                      GET    /cashcards           (list the caller's cards)
                      GET    /cashcards/{id}      (read one card)
                      PUT    /cashcards/{id}      (replace amount, 204)
                      DELETE /cashcards/{id}      (delete, 204)
    - health.py:      GET    /health              (service health check)

Design Principle:
    Routes are THIN: they resolve the caller, call one service method and
    pick the status code and headers. Business rules live in services.
"""
