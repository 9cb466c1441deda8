"""Setup configuration for the modcase announcer."""

from setuptools import setup, find_packages

setup(
    name="modcase-announcer",
    version="0.1.0",
    description="Direct message and webhook notifications for Discord moderation cases",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    package_data={"modcase.localization": ["locales/*.yml"]},
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "py-cord>=2.6",
        "aiohttp>=3.9",
        "aiosqlite>=0.20",
        "PyYAML>=6.0",
        "python-dotenv>=1.0",
        "prompt_toolkit>=3.0",
        "tzdata",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
)
