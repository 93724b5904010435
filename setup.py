from pathlib import Path
from setuptools import setup


root = Path(__file__).parent
PKG = "npkistore"

src = root / "src" / PKG

readme_file = next((f for f in src.iterdir() if f.stem == "README"), None)
if readme_file:
    readme = readme_file.read_text()

    if readme_file.suffix == ".rst":
        readme_type = f"text/x-rst"
    elif readme_file.suffix == ".md":
        readme_type = "text/markdown"
    else:
        readme_type = "text/plain"
else:
    readme = None
    readme_type = None


setup(
    name=PKG,
    version=(src / "VERSION").read_text().strip(),
    description=(src / "DESCRIPTION").read_text().strip(),
    long_description=readme,
    long_description_content_type=readme_type,
    author="Jose A.",
    author_email="jose-pr@coqui.dev",
    url=f"https://github.com/jose-pr/pypki",
    package_dir={"": "src"},
    packages=[PKG, f"{PKG}.devices"],
    package_data={PKG: ["VERSION", "DESCRIPTION", "requirements.txt", "README.md"]},
    install_requires=(src / "requirements.txt").read_text().splitlines(),
    extras_require={"test": ["pytest"]},
    python_requires=">=3.8",
    entry_points={"console_scripts": ["npkistore=npkistore.__main__:main"]},
)
