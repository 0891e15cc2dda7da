from setuptools import setup

setup(
    name="labelprinter",
    version="1.0.0",
    description="Etiquetas 2x1 de amostras em ZPL via Flask, enviadas por TCP para impressora Zebra",
    python_requires=">=3.10",
    packages=["labelprinter", "labelprinter.routes", "labelprinter.services"],
    package_data={
        "labelprinter": ["templates/*.html", "static/*"],
    },
    include_package_data=True,
    install_requires=[
        "flask",
        "jinja2",
        "Pillow",
        "python-dotenv",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["labelprinter=labelprinter.__main__:main"],
    },
)
