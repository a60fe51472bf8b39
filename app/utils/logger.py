import json
from datetime import datetime, timezone
from typing import Dict, Any, List, Optional
from app.config import settings
from pathlib import Path


class ActivityLogger:
    """Logger for saving console operation outcomes to a JSONL file."""
    
    def __init__(self, log_dir: str = None):
        self.log_dir = Path(log_dir or settings.log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.log_file = self.log_dir / "activity.jsonl"
    
    def log_activity(
        self,
        operation: str,
        outcome: str,
        student_id: Optional[int] = None,
        message: Optional[str] = None,
        metadata: Dict[str, Any] = None
    ):
        """Append one operation outcome to the JSONL file."""
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "operation": operation,
            "outcome": outcome,
            "student_id": student_id,
            "message": message,
            "metadata": metadata or {}
        }
        
        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(log_entry, ensure_ascii=False) + "\n")
    
    def get_activity(
        self,
        operation: str = None,
        outcome: str = None,
        limit: int = None
    ) -> List[Dict[str, Any]]:
        """Retrieve logged outcomes, newest first, optionally filtered."""
        if not self.log_file.exists():
            return []
        
        entries = []
        with open(self.log_file, "r", encoding="utf-8") as f:
            for line in f:
                if not line.strip():
                    continue
                try:
                    entry = json.loads(line)
                except json.JSONDecodeError:
                    continue
                if operation and entry.get("operation") != operation:
                    continue
                if outcome and entry.get("outcome") != outcome:
                    continue
                entries.append(entry)
        
        # Stable sort keeps append order for equal timestamps
        entries.reverse()
        entries.sort(key=lambda x: x.get("timestamp", ""), reverse=True)
        
        if limit:
            entries = entries[:limit]
        
        return entries
