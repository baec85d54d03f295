from setuptools import setup

with open("fritzaha/version.py") as f:
    exec(f.read())

setup(
    name="python-fritzaha",
    version=__version__,  # type: ignore # noqa: F821
    description="Python API for the AHA-HTTP interface of AVM FRITZ!Box routers",
    author="",
    author_email="",
    license="GPLv3",
    packages=["fritzaha", "fritzaha.cli"],
    install_requires=[
        "aiohttp>=3",
        "asyncclick>=8.4.2",
        "defusedxml>=0.7",
        "rich>=13",
        "yarl>=1.9",
    ],
    extras_require={
        "speedups": ["orjson>=3.9.1"],
        "test": ["pytest>=7", "pytest-asyncio>=0.21", "pytest-mock>=3.10"],
    },
    python_requires=">=3.11",
    entry_points={"console_scripts": ["fritzaha=fritzaha.cli.main:cli"]},
    zip_safe=False,
)
