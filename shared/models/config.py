from pydantic import BaseModel


class EnvConfig(BaseModel):
    """
    Represents a single configuration parameter a client needs from the environment.

    Attributes:
        env_key (str): The raw key name, prefixed by the client as <TYPE>_<ENGINE>_<KEY>.
        val_type (str): The expected type of the value. Supported types are "string", "number" and "bool".
        default (str | int | float | bool | None): Fallback if the variable is not set. If None, the variable is required.
    """

    env_key: str
    val_type: str
    default: str | int | float | bool | None = None
