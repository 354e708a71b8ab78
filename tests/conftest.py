import os
import sys

# Ensure the 'src' directory is in the python path so we can import shellconf
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))
