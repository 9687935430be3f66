from adapter.mongodb.connection import DATABASE_NAME, USERS_COLLECTION_NAME

__all__ = ['DATABASE_NAME', 'USERS_COLLECTION_NAME']
