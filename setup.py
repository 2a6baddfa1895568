# setup.py
from setuptools import setup, find_packages

install_requires = [
    # --- STORAGE & MODELS ---
    "duckdb>=0.10.0",
    "pydantic>=2.0.0",

    # --- CONFIG & PROMPTS ---
    "python-dotenv>=1.0.0",
    "pyyaml>=6.0.0",
    "jinja2>=3.0.0",
    "rich>=13.0.0",

    # --- UTILS ---
    "httpx>=0.27.0", # Gemini REST client

    # --- TESTS---
    "pytest-asyncio==1.3.0",
    "pytest"
]

setup(
    name="MoveMax_Ops",
    version="0.1.0",
    description="MoveMax|Ops",
    packages=find_packages(include=["movemax", "movemax.*"]),
    package_data={"movemax.shared.config.prompts": ["templates/*.j2"]},
    include_package_data=True,
    install_requires=install_requires,
    entry_points={
        "console_scripts": [
            "movemax=movemax.app.main:main",
        ],
    },
    python_requires=">=3.11",
)
