"""python -m notekeeper"""
import uvicorn

from .config import settings


def main():
    uvicorn.run("notekeeper.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)


if __name__ == "__main__":
    main()
