import os

BROWARD_API_KEY = os.getenv('BROWARD_API_KEY') or ''
BROWARD_BASE_URL = os.getenv('BROWARD_BASE_URL') or ''

LOOKUP_DEADLINE_SECONDS = float(os.getenv('LOOKUP_DEADLINE_SECONDS') or 30)

# concurrent finder calls within one lookup
MAX_WORKERS = int(os.getenv('MAX_WORKERS') or 16)

# concurrent vehicles within one batch job
MAX_THREADS = int(os.getenv('MAX_THREADS') or 1)

SOCRATA_APP_TOKEN = os.getenv('SOCRATA_APP_TOKEN') or ''

T2_CITATION_SEARCH_PATH = (
    os.getenv('T2_CITATION_SEARCH_PATH') or '/Citation/Search')

MYSQL_PASSWORD_STR = os.getenv('MYSQL_PASSWORD') or ''
MYSQL_URI = (f"mysql+pymysql://{os.getenv('MYSQL_USER')}:"
             f"{MYSQL_PASSWORD_STR}@localhost/"
             f"{os.getenv('MYSQL_DATABASE')}?charset=utf8mb4")

DATABASE_URI = os.getenv('DATABASE_URI') or MYSQL_URI
