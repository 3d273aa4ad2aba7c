# Services package init
"""
Freshrack Backend — Services Layer
====================================

Service Inventory:
    - FoodService:   create / filter / expiry views / stats / get / patch / delete
    - NoteService:   list and create notes for a food
    - food_filters:  endpoint inputs → SQLAlchemy WHERE clauses
    - expiry:        clock snapshot and the 5-day nearly-expired window
    - store:         Id parsing and store-failure translation
"""
