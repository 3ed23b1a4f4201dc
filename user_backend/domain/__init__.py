"""
Domain layer: the User entity, its field validators and the error taxonomy.
No framework or database imports live here.
"""
