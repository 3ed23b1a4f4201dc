"""
API layer for the user backend.

Exposes the user management endpoints under /api (register, checkUsers,
updateUser, deleteUser, checkEmail) and the error normalization stage.
"""
