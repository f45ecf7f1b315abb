"""
Logger Manager Module
Keeps a record of each numbering session and mirrors it to an optional log file
"""

import json
import logging
from dataclasses import asdict
from datetime import datetime
from pathlib import Path


class LoggerManager:
    """Manages logging for page numbering sessions"""

    def __init__(self, log_directory=None, log_callback=None):
        """
        Initialize the logger manager

        Args:
            log_directory (str): Directory for log files (optional)
            log_callback: Optional callback function for real-time logging
        """
        self.log_callback = log_callback
        self.log_directory = log_directory
        self.session_id = datetime.now().strftime("%Y%m%d_%H%M%S")

        self.session_log = {
            'session_id': self.session_id,
            'start_time': datetime.now().isoformat(),
            'source_file': None,
            'page_count': 0,
            'settings': {},
            'pages_numbered': [],
            'pages_skipped': [],
            'errors': [],
            'statistics': {}
        }

        if self.log_directory:
            self.setup_file_logging()

    def log(self, message, level='INFO'):
        """Log a message with timestamp"""
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        formatted_message = f"[{timestamp}] [{level}] {message}"

        if self.log_callback:
            self.log_callback(formatted_message)

        if hasattr(self, 'file_logger'):
            if level == 'ERROR':
                self.file_logger.error(message)
            elif level == 'WARNING':
                self.file_logger.warning(message)
            elif level == 'DEBUG':
                self.file_logger.debug(message)
            else:
                self.file_logger.info(message)

    def setup_file_logging(self):
        """Set up file-based logging"""
        log_dir = Path(self.log_directory)
        log_dir.mkdir(parents=True, exist_ok=True)

        log_path = log_dir / f"page_numbering_{self.session_id}.log"

        self.file_logger = logging.getLogger(f'PageNumbering_{self.session_id}')
        self.file_logger.setLevel(logging.DEBUG)

        for handler in self.file_logger.handlers[:]:
            self.file_logger.removeHandler(handler)

        file_handler = logging.FileHandler(str(log_path), encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        self.file_logger.addHandler(file_handler)

        self.log(f"File logging initialized: {log_path}")

    def start_session(self, source_file, page_count, numbering, position, font):
        """Start a new stamping session"""
        self.session_log['source_file'] = source_file
        self.session_log['page_count'] = page_count
        self.session_log['settings'] = {
            'numbering': asdict(numbering),
            'position': {key: getattr(value, 'value', value)
                         for key, value in asdict(position).items()},
            'font': asdict(font),
        }
        self.session_log['start_time'] = datetime.now().isoformat()

        self.log(f"Starting numbering session: {self.session_id}")
        self.log(f"Source: {source_file} ({page_count} pages)")

    def log_page_numbered(self, page_index, display_number, x, y):
        """Log a page that received a number"""
        self.session_log['pages_numbered'].append({
            'page': page_index,
            'number': display_number,
            'x': round(x, 2),
            'y': round(y, 2),
        })
        self.log(f"Page {page_index}: drew '{display_number}' at ({x:.1f}, {y:.1f})", 'DEBUG')

    def log_page_skipped(self, page_index, reason):
        """Log a page left without a number"""
        self.session_log['pages_skipped'].append({'page': page_index, 'reason': reason})
        self.log(f"Page {page_index}: no number ({reason})", 'DEBUG')

    def log_error(self, operation, error):
        """Log a failed operation"""
        self.session_log['errors'].append({
            'operation': operation,
            'error': str(error),
            'timestamp': datetime.now().isoformat()
        })
        self.log(f"Error in {operation}: {error}", 'ERROR')

    def finalize_session(self):
        """Finalize the session and generate statistics"""
        self.session_log['end_time'] = datetime.now().isoformat()

        stats = {
            'total_pages': self.session_log['page_count'],
            'pages_numbered': len(self.session_log['pages_numbered']),
            'pages_skipped': len(self.session_log['pages_skipped']),
            'errors': len(self.session_log['errors']),
        }
        self.session_log['statistics'] = stats

        self.log("=== NUMBERING COMPLETE ===")
        self.log(f"Pages numbered: {stats['pages_numbered']} of {stats['total_pages']}")
        if stats['errors']:
            self.log(f"Errors: {stats['errors']}", 'WARNING')

        self.close_file_logging()
        return stats

    def close_file_logging(self):
        """Flush and release the session log file"""
        if not hasattr(self, 'file_logger'):
            return
        for handler in self.file_logger.handlers[:]:
            handler.close()
            self.file_logger.removeHandler(handler)
        del self.file_logger

    def save_log_file(self, output_directory):
        """Save the session record as JSON"""
        if not output_directory:
            return None

        log_dir = Path(output_directory)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / f"numbering_log_{self.session_id}.json"

        try:
            with open(log_path, 'w', encoding='utf-8') as f:
                json.dump(self.session_log, f, indent=2, ensure_ascii=False)
        except OSError as e:
            self.log(f"Error saving log file: {e}", 'ERROR')
            return None

        self.log(f"Log file saved: {log_path}")
        return str(log_path)

    def get_statistics(self):
        """Get session statistics"""
        return self.session_log.get('statistics', {})
