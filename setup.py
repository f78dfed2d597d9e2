from setuptools import setup, find_namespace_packages

setup(
    name="shorthand-ddl",
    version="0.1",
    packages=find_namespace_packages(include=["api*", "transformer*", "utils*"]),
    py_modules=["main"],
    install_requires=[
        line.strip()
        for line in open("requirements.txt")
        if not line.startswith("#") and line.strip()
    ],
    extras_require={
        "test": ["pytest", "pytest-asyncio", "httpx"],
    },
)
