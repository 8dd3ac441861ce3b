from setuptools import setup, find_packages

setup(
    name="polyglot-whisperer",
    version="0.1.0",
    description="Live meeting transcription with a translated mirror transcript",
    author="",
    python_requires=">=3.8",
    packages=find_packages(include=["polyglot", "polyglot.*"]),
    install_requires=[
        "numpy>=1.21.0",
        "rich>=12.5.0",
        "pyyaml>=6.0.0",
        "pypubsub>=4.0.3",
    ],
    extras_require={
        "audio": [
            "pyaudio>=0.2.11",
        ],
        "google": [
            "google-cloud-speech>=2.16.0",
            "google-auth>=2.10.0",
        ],
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "polyglot=polyglot.main:main",
        ],
    },
)
