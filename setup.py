from setuptools import setup, find_packages

# Load all requirements from requirements.txt
with open("requirements.txt", "r", encoding="utf-8") as f:
    requirements = [line.strip() for line in f if line.strip() and not line.startswith("#")]

setup(
    name="sio-tools",
    version="1.0.0",
    description="SIO Tools: interactive Socket.IO event console",
    packages=find_packages(include=["sio_gui", "sio_gui.*"]),
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7", "hypothesis>=6"],
    },
    include_package_data=True,
    package_data={"sio_gui": ["theme/*.qss"]},
    entry_points={
        "gui_scripts": [
            "sio-tools = sio_gui.__main__:main"
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    python_requires='>=3.9',
)
