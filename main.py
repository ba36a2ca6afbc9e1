import uvicorn

from app.factory import create_app
from app.utils.config import get_settings


settings = get_settings()

app = create_app(settings)


if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port)
