"""Setup configuration for ux-auditor package."""

from setuptools import setup, find_namespace_packages

setup(
    name="ux-auditor",
    version="0.1.0",
    description="Single-page UX/UI and accessibility auditor built on Playwright",
    packages=find_namespace_packages(include=["src", "src.*"], exclude=["src.tests", "src.tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "playwright>=1.40.0",
        "pydantic>=2.0.0",
        "python-dotenv>=1.0.0",
        "pyyaml>=6.0",
        "click>=8.1.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.1.0",
            "pytest-mock>=3.11.0",
            "ruff>=0.1.0",
            "mypy>=1.5.0",
            "black>=23.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "ux-audit=src.cli.app:main",
        ],
    },
)
