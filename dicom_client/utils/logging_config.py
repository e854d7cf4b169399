#!/usr/bin/env python
"""
Logging configuration for the DICOM client
"""

import logging
import logging.handlers
import sys
from pathlib import Path

def configure_logging(level=logging.INFO, log_file=None):
    """
    Configure logging for the application
    
    Parameters:
    -----------
    level : int
        Logging level (default: logging.INFO)
    log_file : str, optional
        Path to log file. If None, logs to console only.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    
    console_formatter = logging.Formatter('%(levelname)s - %(message)s')
    file_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    
    # Log to stderr so printed configuration on stdout stays clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)
    
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        
        # maxBytes=100MB, backupCount=5
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, 
            maxBytes=100 * 1024 * 1024,
            backupCount=5
        )
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)
    
    # pydicom is chatty at debug level
    logging.getLogger('pydicom').setLevel(max(level, logging.INFO))
    
    return root_logger
