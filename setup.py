# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="vcxgen",
    version="0.1.0",
    description="Generate Visual C++ project and filter files from a list of sources",
    packages=find_namespace_packages(where="src", include=["vcxgen", "vcxgen.*"]),
    package_dir={"": "src"},
    package_data={
        "vcxgen.resources": ["*.vcxproj"],
    },
    python_requires=">=3.9",
    install_requires=[
        "lxml>=4.9",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        'console_scripts': [
            'vcxgen=vcxgen.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
