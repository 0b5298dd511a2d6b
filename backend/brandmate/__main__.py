# python -m brandmate
import uvicorn

from brandmate.config import settings

def main() -> None:
    uvicorn.run("brandmate.main:app", host=settings.host, port=settings.port, log_level="info")

if __name__ == "__main__":
    main()
