from setuptools import setup, find_packages

with open("requirements.txt") as f:
    install_requires = f.read().strip().split("\n")

# get version from __version__ variable in payroll_engine/__init__.py
from payroll_engine import __version__ as version

setup(
    name="payroll_engine",
    version=version,
    description="Payroll Engine - Perhitungan BPJS, PPh 21 TER, prorate & potongan gaji Indonesia",
    author="IMOGI",
    author_email="hello@imogi.tech",
    packages=find_packages(exclude=["tests", "tests.*"]),
    zip_safe=False,
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=install_requires,
    extras_require={"test": ["pytest"]},
)
