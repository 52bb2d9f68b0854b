from setuptools import setup, find_packages

setup(
    name="tvdbclient",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.8",
    install_requires=[
        "requests>=2.31.0",
        "urllib3>=2.0.0",
        "python-dotenv>=1.0.0",
        "fuzzywuzzy>=0.18.0",
        "python-Levenshtein>=0.23.0",
    ],
    extras_require={
        "test": ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": [
            "tvdbclient=tvdbclient.main:main",
        ],
    },
)
