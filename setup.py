# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="deobfuscator4j",
    version="1.0.0",
    description="Parse yGuard/ProGuard rename logs and publish Java deobfuscation maps",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["deobfuscator4j*"]),
    install_requires=[
        "requests",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'deobfuscator4j=deobfuscator4j.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
