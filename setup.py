"""
Cryptoscope Setup Configuration
Repeating-key XOR cryptanalysis and manual CBC mode over an ECB primitive
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="cryptoscope",
    version="1.0.0",
    author="BearWatchDev",
    author_email="BearWatchDev@pm.me",
    description="Repeating-key XOR breaker and CBC-over-ECB toolkit",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/BearWatchDev/Cryptoscope",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Information Technology",
        "Topic :: Security :: Cryptography",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Operating System :: POSIX :: Linux",
    ],
    python_requires=">=3.8",
    install_requires=[
        # AES block primitive and PKCS#7 padding
        "pycryptodome>=3.19.0",
    ],
    extras_require={
        "api": ["fastapi>=0.104.0", "uvicorn>=0.24.0", "python-multipart>=0.0.6"],
        "test": [
            "pytest>=7.4.0",
            "httpx>=0.25.0",
            "fastapi>=0.104.0",
            "python-multipart>=0.0.6",
        ],
        "all": ["fastapi>=0.104.0", "uvicorn>=0.24.0", "python-multipart>=0.0.6"],
    },
    entry_points={
        "console_scripts": [
            "cryptoscope=cryptoscope.cli:main",
        ],
    },
)
