# app/utils/retry.py
from sqlalchemy.exc import SQLAlchemyError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type


def db_retry(attempts: int = 3):
    """Retry a unit of database work on driver/ORM errors, re-raising the last one."""
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        retry=retry_if_exception_type(SQLAlchemyError),
    )
