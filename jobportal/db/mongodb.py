"""
MongoDB Connection Utility

MongoDB stores:
- Accounts (job seekers and employers)
- Job postings
- Applications (one per seeker per job)
- Server-side sessions

Uniqueness rules (account email, applicant/job pair) are enforced by unique
indexes so that concurrent writes cannot slip past a read-then-write check.
"""
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.collection import Collection
from jobportal.core.config import get_settings
from jobportal.core.logging_config import get_logger

logger = get_logger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(get_settings().mongodb_uri)
    return _client


def get_mongo_db() -> Database:
    """Get the job portal database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[get_settings().mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """
    Get a specific collection.
    Collections we'll use:
    - accounts: seekers and employers
    - jobs: job postings
    - applications: seeker submissions against jobs
    - sessions: login sessions keyed by cookie token
    """
    db = get_mongo_db()
    return db[name]


def ping_mongo() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "accounts": "accounts",
    "jobs": "jobs",
    "applications": "applications",
    "sessions": "sessions"
}


def init_mongo_indexes():
    """
    Create indexes for uniqueness rules and query performance.
    Call this once during app startup.
    """
    db = get_mongo_db()
    settings = get_settings()

    # One account per email
    db[COLLECTIONS["accounts"]].create_index("email", unique=True)

    # Employer's jobs, newest first
    db[COLLECTIONS["jobs"]].create_index([
        ("posted_by", ASCENDING),
        ("created_at", DESCENDING)
    ])

    # A seeker may apply to a given job at most once
    db[COLLECTIONS["applications"]].create_index([
        ("applicant_id", ASCENDING),
        ("job_id", ASCENDING)
    ], unique=True)
    db[COLLECTIONS["applications"]].create_index("job_id")

    # Session lookup by token; stale sessions expire on their own
    db[COLLECTIONS["sessions"]].create_index("token", unique=True)
    db[COLLECTIONS["sessions"]].create_index(
        "created_at",
        expireAfterSeconds=settings.session_ttl_minutes * 60
    )

    logger.info("MongoDB indexes created successfully")
