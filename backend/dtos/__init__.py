"""
Data Transfer Objects (DTOs) Layer

DTOs decouple the API layer and the services from the database models.

Structure:
- request/: DTOs for incoming API requests
- response/: DTOs for outgoing API responses
- internal/: DTOs passed between the routes and the upload service
"""
