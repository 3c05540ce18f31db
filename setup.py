from setuptools import setup, find_packages

setup(
    name="incidentx",
    version="0.1.0",
    packages=find_packages(include=["incidentx", "incidentx.*"]),
    install_requires=[
        "pyyaml",
        "pydantic>=2",
        "pymongo",
        "pytesseract",
        "Pillow",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "incidentx=incidentx.cli:main",
        ],
    },
)
