# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="adminlog",
    version="1.0.0",
    description="Local file and console logging with durable configuration for sysadmin scripts",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["adminlog", "adminlog.*"]),
    python_requires=">=3.9",
    install_requires=[
        "colorlog",  # Colores por nivel en la consola
        "customtkinter",  # Diálogos nativos de selección de rutas
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'adminlog=adminlog.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
