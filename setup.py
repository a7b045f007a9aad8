from setuptools import setup

setup(
    name="shell-tools",
    version="1.0.0",
    description="Small cross-platform shell utilities: clip-relay, docker-run-local and print-args.",
    author="Max Carlson",
    author_email="carlsonamax@gmail.com",
    url="https://github.com/MaxCarlson/scripts",
    package_dir={
        "cross_platform": "modules/cross_platform",
        "standard_ui": "modules/standard_ui",
        "pyscripts": "pyscripts",
    },
    packages=["cross_platform", "standard_ui", "pyscripts"],
    install_requires=[
        "rich",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "clip-relay=pyscripts.clip_relay:main",
            "docker-run-local=pyscripts.docker_run_local:main",
            "print-args=pyscripts.print_args:main",
        ],
    },
    python_requires=">=3.8",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
