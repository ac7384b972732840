from setuptools import setup, find_packages

# Read requirements.txt
def read_requirements(filename="requirements.txt"):
    with open(filename) as f:
        return [
            line.strip()
            for line in f
            if line.strip() and not line.startswith("#")
        ]

# Read README
with open('README.md') as f:
    long_description = f.read()

setup(
    name="inference-gateway",
    version="0.1.0",
    packages=find_packages("src"),
    package_dir={"": "src"},
    package_data={"inference_gateway.models": ["catalog.yml"]},
    install_requires=read_requirements(),
    extras_require={
        'dev': [
            'pytest>=7.0.0',
            'pytest-asyncio>=0.21.0',
            'httpx>=0.23.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'inference-gateway=inference_gateway.runner:main',
        ],
    },
    python_requires='>=3.9',
    description="A resilient gateway in front of hosted HuggingFace and OpenRouter inference APIs",
    long_description=long_description,
    long_description_content_type='text/markdown',
    author="Charles Feinn",
    author_email="charles@appsimple.io",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.9",
    ],
)
