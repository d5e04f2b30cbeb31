from setuptools import setup, find_packages

setup(
    name="zombie-browser",
    version="0.1.0",
    description="Headless browser automation with composable actions over pluggable engines",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=[
        "beautifulsoup4>=4.12.0",
        "soupsieve>=2.5",
        "html2text>=2020.1.16",
        "httpx>=0.24.0",
        "selenium>=4.10.0",
        "webdriver-manager>=3.8.0",
        "selenium-stealth>=1.0.6",
        "undetected-chromedriver>=3.5.0",
    ],
    extras_require={
        "playwright": ["playwright>=1.35.0"],
        "test": ["pytest>=7.0", "pytest-asyncio>=0.21"],
    },
    entry_points={
        'console_scripts': [
            'zombie=zombie.__main__:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
)
