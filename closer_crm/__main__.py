import uvicorn

from .config import APP_ENV, PORT

if __name__ == "__main__":
    uvicorn.run("closer_crm.main:app", host="0.0.0.0", port=PORT, reload=APP_ENV == "development")
