# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="includeflat",
    version="1.0.0",
    description="Flattens C/C++ style sources by recursively expanding #include directives",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["includeflat*"]),
    package_data={
        "includeflat.interface.locales": ["*.json"],
    },
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'includeflat=includeflat.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
