# backend/app/db/database.py

"""
Configuración principal de la base de datos para la aplicación.

Este módulo establece la conexión con la base de datos usando SQLAlchemy
asíncrono y define los componentes básicos que serán utilizados por toda
la aplicación:
- Motor de base de datos (engine)
- Fábrica de sesiones (AsyncSessionLocal)
- Clase base para modelos (Base)
- Inicialización explícita del esquema (init_db)

La creación de tablas ya no ocurre al importar el módulo: se invoca una sola
vez en el arranque de la aplicación, y la carga de datos de ejemplo vive en
app/db/seed.py para que los tests puedan omitirla.
"""

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool
from app.core.config import settings # Importamos nuestra configuración


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite no aplica ON DELETE CASCADE sin esta pragma
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Crea un motor asíncrono para la URL dada.

    Para SQLite se activan las claves foráneas en cada conexión y se usa
    NullPool, de modo que cada sesión abre su propia conexión al fichero.
    """
    if database_url.startswith("sqlite"):
        engine = create_async_engine(database_url, echo=echo, poolclass=NullPool)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine
    return create_async_engine(database_url, echo=echo, pool_pre_ping=True)


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker:
    # expire_on_commit=False es importante para que los objetos sigan siendo utilizables
    # después de que la transacción se haya confirmado.
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# Crear el motor de base de datos asíncrono
engine = build_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)

# Crear un sessionmaker asíncrono
AsyncSessionLocal = build_sessionmaker(engine)

# Clase base declarativa para todos los modelos ORM
Base = declarative_base()


async def init_db(target_engine: AsyncEngine = None) -> None:
    """
    Crea todas las tablas definidas en los modelos si no existen.
    """
    # Registrar los modelos en los metadatos antes de crear las tablas
    from app.db.models import seller_model, case_model  # noqa: F401

    async with (target_engine or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
