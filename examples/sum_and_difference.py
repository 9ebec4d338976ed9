import os
import sys
import logging

# Add the src directory to Python path to import local sparse_matrix
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))


from sparse_matrix import MatrixPipeline, PipelineConfig, SparseMatrix


logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
logger = logging.getLogger(__name__)


def run_demo():
    script_dir = os.path.dirname(os.path.abspath(__file__))
    data_dir = os.path.join(script_dir, '..', 'tests', 'data')
    out_dir = os.path.join(script_dir, 'output')
    os.makedirs(out_dir, exist_ok=True)

    config = PipelineConfig(
        matrix_a_path=os.path.join(data_dir, 'matrixA.txt'),
        matrix_b_path=os.path.join(data_dir, 'matrixB.txt'),
        sum_path=os.path.join(out_dir, 'sumMatrix.txt'),
        difference_path=os.path.join(out_dir, 'diffMatrix.txt'),
        product_path=os.path.join(out_dir, 'prodMatrix.txt'),
    )
    pipeline = MatrixPipeline(config)
    result = pipeline.run()
    if not result.ok:
        logger.error(str(result.error))
        return

    for operation, matrix in pipeline.outputs.items():
        logger.info("%s:\n%s", operation, matrix)

    # dense view for a quick visual check
    a = SparseMatrix.from_file(config.matrix_a_path)
    logger.info("A as dense:\n%s", a.to_dense())


if __name__ == "__main__":
    run_demo()
