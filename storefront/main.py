# storefront/main.py
import uvicorn

from storefront.api import create_app
from storefront.data.database import Database
from storefront.utils.logging import configure_logging
from storefront.utils.settings import DATABASE_URL, DB_ECHO

configure_logging()

app = create_app(Database(DATABASE_URL, echo=DB_ECHO))

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
