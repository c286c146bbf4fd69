# setup.py
from setuptools import setup, find_packages

install_requires = [
    # --- UI & REACTIVE ---
    "flet>=0.28.0",
    # FletXr may only publish pre-releases; if pip skips it: pip install FletXr --pre
    "FletXr",

    # --- IDENTITY ---
    "msal>=1.28.0",

    # --- CONFIG ---
    "pydantic>=2.0.0",
    "python-dotenv>=1.0.0",
    "pyyaml>=6.0.0",
]

extras_require = {
    # --- TESTS---
    "test": [
        "pytest",
        "pytest-asyncio>=0.23",
    ],
}

setup(
    name="sessiongate",
    version="0.1.0",
    description="SessionGate - reconciled sign-in state for Flet apps",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=install_requires,
    extras_require=extras_require,
    entry_points={
        "console_scripts": [
            "sessiongate=sessiongate.portal.main:run",
        ],
    },
    python_requires=">=3.11",
)
