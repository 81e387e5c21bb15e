"""Setup configuration for BANKRANK."""

from setuptools import find_packages, setup

_DEV_REQUIRES = [
    "pytest>=8.0.0",
    "pytest-asyncio>=0.23.0",
    "pytest-mock>=3.12.0",
    "respx>=0.21.0",
    "python-dotenv>=1.0.0",
]

setup(
    name="bankrank",
    version="0.1.0",
    description="Ranks Aave net deposits among U.S. banks by consolidated assets",
    python_requires=">=3.11",
    packages=find_packages(where="src", include=["bankrank*"]),
    package_dir={"": "src"},
    install_requires=[
        "httpx>=0.27.0",
        "pandas>=2.2.0",
        "pydantic>=2.6.0",
        "pydantic-settings>=2.1.0",
        "beautifulsoup4>=4.12.0",
    ],
    entry_points={
        "console_scripts": [
            "bankrank=bankrank.cli:cli_entry",
        ],
    },
    extras_require={
        "dev": _DEV_REQUIRES,
        "test": _DEV_REQUIRES,
    },
)
