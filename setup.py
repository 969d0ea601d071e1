# setup.py
from setuptools import setup, find_packages

setup(
    name="rotalog",
    version="0.1.0",
    description="Leveled log handlers with asynchronous buffered writes and size-based rotation",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_packages(where="src"),  # rotalog, rotalog.handlers, rotalog.cli
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        'console_scripts': [
            'rotalog=rotalog.cli.app:main',  # Pipe stdin into a rotating log file
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
