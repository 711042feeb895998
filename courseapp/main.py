import logging
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from courseapp.core import config
from courseapp.core.errors import install_error_handlers
from courseapp.database import Database
from courseapp.routes import auth_routes, course_routes, student_routes

logger = logging.getLogger(__name__)


def create_app(database_url: str | None = None, static_dir: str | None = None) -> FastAPI:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    config.validate_runtime_config()

    app = FastAPI(title="Course Enrollment API", debug=config.DEBUG)
    app.state.database = Database(database_url or config.DATABASE_URL)

    if config.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=['*'],
            allow_headers=['*'],
        )

    install_error_handlers(app)

    @app.on_event('startup')
    def initialize_database() -> None:
        try:
            app.state.database.init()
        except SQLAlchemyError:
            logger.exception('Database initialization failed. Check DATABASE_URL.')
            raise

    @app.on_event('shutdown')
    def close_database() -> None:
        app.state.database.dispose()

    @app.get('/api/health')
    def health():
        return {'status': 'ok'}

    app.include_router(auth_routes.router, prefix='/api')
    app.include_router(course_routes.router, prefix='/api')
    app.include_router(student_routes.router, prefix='/api')

    frontend = Path(static_dir or config.STATIC_DIR)
    if frontend.is_dir():
        app.mount('/', StaticFiles(directory=frontend, html=True), name='frontend')
    else:
        logger.info('Static directory %s not found; serving the API only.', frontend)

    return app


def main() -> None:
    uvicorn.run(create_app(), host=config.HOST, port=config.PORT)


if __name__ == '__main__':
    main()
