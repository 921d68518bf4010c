"""Setup script for Atelie Art Agent."""

from setuptools import setup, find_packages

setup(
    name="atelie-art-agent",
    version="0.1.0",
    description="Art catalog search with AI room and text matching",
    author="Atelie",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.110",
        "uvicorn[standard]>=0.27",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "sqlalchemy[asyncio]>=2.0",
        "asyncpg>=0.29",
        "httpx>=0.26",
        "openai>=1.12",
        "tenacity>=8.2",
        "celery[redis]>=5.3",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
            "aiosqlite>=0.19",
        ],
    },
)
