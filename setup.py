"""Setup configuration for the Horizon Discord Bot."""

from setuptools import setup, find_packages

setup(
    name="horizon-bot",
    version="0.1.0",
    description="A Discord community bot: flagged-message review, reaction roles and PDF merging",
    packages=find_packages(where="src", include=["horizon", "horizon.*"]),
    package_dir={"": "src"},
    python_requires=">=3.11",
    install_requires=[
        "py-cord>=2.6",
        "aiosqlite>=0.20",
        "PyYAML>=6.0",
        "python-dotenv>=1.0",
        "prompt_toolkit>=3.0",
        "pypdf>=4.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "horizon=horizon.main:main",
        ],
    },
)
