import logging

from test import bench_kem

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    print("Running the ML-KEM benchmark from 'test/bench_kem.py'...")
    bench_kem.main()
    print("\nBenchmark finished.")
