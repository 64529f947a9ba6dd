# setup.py
from setuptools import setup, find_packages

setup(
    name="rodger",
    version="0.1.0",
    description="A day-by-day shop ledger driven by plain English/Hindi sentences",
    packages=find_packages(include=["rodger", "rodger.*"]),
    python_requires=">=3.9",
    install_requires=[
        "click>=7.0",
        "pyyaml>=5.3",
        "pandas>=1.1",
        "python-dotenv>=0.19",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "rodger=rodger.cli:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
