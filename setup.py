# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="reviewtree",
    version="1.0.0",
    description="Compressed, review-aware directory trees and CSV exports from per-file change records",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["reviewtree", "reviewtree.*"]),
    python_requires=">=3.9",
    install_requires=[
        "requests>=2.28",  # Remote record source (--url)
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'reviewtree=reviewtree.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
