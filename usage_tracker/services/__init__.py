from .mongodb import (
    mongodb,
    connect_to_mongodb,
    close_mongodb_connection,
    get_database,
    get_db
)

__all__ = [
    'mongodb',
    'connect_to_mongodb',
    'close_mongodb_connection',
    'get_database',
    'get_db'
]
