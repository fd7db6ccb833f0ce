import sys
import os

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from demo import sample_data
from utils.log import setup_logging

if __name__ == '__main__':
    setup_logging()
    written = sample_data.seed(n_seniors=20, n_applications=5)
    print(f"Seeded {written} sample records into the data directory")
