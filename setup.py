import setuptools
from pathlib import Path

ROOT = Path(__file__).parent


def read_requirements(filename: str = "requirements.txt") -> list[str]:
    req_path = ROOT / filename
    if not req_path.exists():
        return []
    reqs: list[str] = []
    for line in req_path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        reqs.append(line)
    return reqs


readme = ROOT / "README_PYPI.md"
long_description = readme.read_text(encoding="utf-8") if readme.exists() else ""

setuptools.setup(
    name="keynd",
    version="0.1.0a0",  # PEP 440 compliant
    author="keywind",
    author_email="watersprayer127@gmail.com",
    description=(
        "KeyND is a strided N-dimensional array library with NumPy-style "
        "shapes, dtypes, zero-copy views, broadcasting and slicing over a "
        "flat typed buffer."
    ),
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="Apache-2.0",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
    ],
    package_dir={"": "src"},
    packages=setuptools.find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=read_requirements(),
    extras_require={"test": ["pytest"]},
    zip_safe=False,
)
