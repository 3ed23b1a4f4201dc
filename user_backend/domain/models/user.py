from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from ..exceptions import SchemaValidationError
from ..validators import (
    MAX_AGE,
    MIN_AGE,
    is_valid_person_name,
    normalize_email,
    to_age,
    validate_email,
    validate_password,
)

PASSWORD_RULE_MESSAGE = (
    "Password requires at least 8 characters, with at least one upcase, "
    "a lowercase and a special character!"
)


@dataclass
class User:
    """
    Domain model for the User entity.

    Carries its own schema rules (``validate``) and the password lifecycle
    hook (``prepare_for_save``): a plaintext password set through ``create``
    or ``set_password`` is checked for strength and hashed before persisting.
    A password loaded from storage is a hash and is never re-checked.
    """
    id: Optional[str]
    name: Any
    age: Any
    email: Any
    password: str
    password_modified: bool = field(default=False, repr=False, compare=False)

    @classmethod
    def create(cls, name: Any, age: Any, email: Any, password: str) -> "User":
        """Build a new, unsaved user from submitted values"""
        converted_age = to_age(age)
        return cls(
            id=None,
            name=name.strip() if isinstance(name, str) else name,
            age=converted_age if converted_age is not None else age,
            email=normalize_email(email) if isinstance(email, str) else email,
            password=password,
            password_modified=True,
        )

    def set_password(self, plain_password: str) -> None:
        self.password = plain_password
        self.password_modified = True

    def validate(self) -> None:
        """
        Apply the schema rules to every field

        Raises:
            SchemaValidationError: With one message per failing field
        """
        errors: Dict[str, str] = {}

        if self.name is None or (isinstance(self.name, str) and not self.name.strip()):
            errors["name"] = "Name is required"
        elif not is_valid_person_name(self.name):
            errors["name"] = "Name must not contain numbers!"

        if self.age is None or self.age == "":
            errors["age"] = "Age is required!"
        else:
            age = to_age(self.age)
            if age is None:
                errors["age"] = "Age must be a number!"
            elif age < MIN_AGE:
                errors["age"] = f"Age must be at least {MIN_AGE}"
            elif age > MAX_AGE:
                errors["age"] = f"Age must be at most {MAX_AGE}"

        if not self.email:
            errors["email"] = "Email is required"
        elif not validate_email(self.email):
            errors["email"] = "Please, insert a valid email!"

        if not self.password:
            errors["password"] = "Password is required"
        elif self.password_modified and not validate_password(self.password):
            errors["password"] = PASSWORD_RULE_MESSAGE

        if errors:
            raise SchemaValidationError(errors)

    def prepare_for_save(self, password_hasher: Callable[[str], str]) -> None:
        """Validate, then hash the password if a new plaintext was set"""
        self.validate()
        if self.password_modified:
            self.password = password_hasher(self.password)
            self.password_modified = False

    def to_public_dict(self) -> Dict[str, Any]:
        """Serializable view of the user; the password is never included"""
        return {
            "_id": self.id,
            "name": self.name,
            "email": self.email,
            "age": self.age,
        }
