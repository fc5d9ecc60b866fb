"""
Service layer.

Each service encapsulates the business rules for one resource and
talks to the database exclusively through the helpers in
``core.db``.  Validation rules shared by create and update live in
``validation``.
"""
