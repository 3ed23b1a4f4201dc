"""Constants for User model field names"""


class UserFields:
    """Field name constants for User model"""
    ID = "id"
    NAME = "name"
    AGE = "age"
    EMAIL = "email"
    PASSWORD = "password"

    # MongoDB specific
    MONGO_ID = "_id"  # MongoDB's internal _id field

    # Fields a client may submit on register/update
    WRITABLE = (NAME, AGE, EMAIL, PASSWORD)
