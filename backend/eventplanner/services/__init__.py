"""
Service layer: business rules between the routes and the ORM.
Routes own the session; services flush and leave committing to the request.
"""
