import logging
import os
from skillforge import create_app

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
)
logger = logging.getLogger('skillforge.run')

# Create Flask app instance
app = create_app()

logger.info("Running in %s mode", 'production' if os.getenv('FLASK_ENV') == 'production' else 'development')

if __name__ == '__main__':
    debug_mode = app.config['DEBUG']
    logger.info("Debug mode is %s", 'on' if debug_mode else 'off')
    app.run(debug=debug_mode, host="0.0.0.0", port=app.config['PORT'])
